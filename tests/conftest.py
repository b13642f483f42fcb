"""Pytest fixtures for placement tests."""

import json
import math

import pytest

from square_rings.pois import POI


@pytest.fixture
def poi_width() -> float:
    """Label size used by the reference scenarios."""
    return 30.0


@pytest.fixture
def close_pair() -> list[POI]:
    """Two POIs 0.5 rad apart: too close for ring 0, fine on ring 1."""
    return [
        POI(id=0, label="near", azimuth=0.0, distance=10.0),
        POI(id=1, label="far", azimuth=0.5, distance=20.0),
    ]


@pytest.fixture
def wrap_pair() -> list[POI]:
    """Two POIs either side of the 0/2pi boundary, 0.02 rad apart."""
    return [
        POI(id=0, label="a", azimuth=0.01, distance=1.0),
        POI(id=1, label="b", azimuth=2 * math.pi - 0.01, distance=2.0),
    ]


@pytest.fixture
def clustered_pois() -> list[POI]:
    """Twenty POIs squeezed into a 0.2 rad wedge, sorted by distance."""
    return [
        POI(id=i, label=f"p{i}", azimuth=1.0 + 0.01 * i, distance=float(i))
        for i in range(20)
    ]


@pytest.fixture
def scattered_pois() -> list[POI]:
    """Forty POIs spread around the circle with a fixed pseudo-random pattern."""
    pois = []
    for i in range(40):
        azimuth = (i * 2.399963) % (2 * math.pi)  # Golden angle steps
        pois.append(POI(id=i, label=str(i), azimuth=azimuth, distance=10.0 + (i * 37) % 90))
    return sorted(pois, key=lambda p: p.distance)


@pytest.fixture
def poi_json_file(tmp_path):
    """POI input file in JSON form, unsorted, mixing radians and degrees."""
    records = [
        {"id": 1, "label": "Tower", "azimuth": 0.5, "distance": 40.0},
        {"id": 2, "label": "Bridge", "azimuth_deg": 30.0, "distance": 12.5},
        {"id": 3, "azimuth": 3.0, "distance": 80.0},
        {"id": 4, "label": "Harbor", "azimuth": 0.0, "distance": 5.0},
    ]
    path = tmp_path / "pois.json"
    path.write_text(json.dumps(records))
    return path


@pytest.fixture
def poi_csv_file(tmp_path):
    """POI input file in CSV form."""
    path = tmp_path / "pois.csv"
    path.write_text(
        "id,label,azimuth,azimuth_deg,distance\n"
        "1,Tower,0.5,,40\n"
        "2,Bridge,,30,12.5\n"
        "3,,3.0,,80\n"
    )
    return path
