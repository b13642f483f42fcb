"""Point-of-interest records and input file loading."""

import csv
import json
import math
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class POI:
    """A labeled point of interest at a polar position around the origin."""

    id: int
    label: str
    azimuth: float  # Radians, [0, 2pi)
    distance: float  # Original radial distance, only used for ordering

    def __post_init__(self) -> None:
        if not math.isfinite(self.azimuth) or not 0 <= self.azimuth < 2 * math.pi:
            raise ValueError(f"POI {self.id}: azimuth {self.azimuth!r} not in [0, 2pi)")
        if not math.isfinite(self.distance) or self.distance < 0:
            raise ValueError(f"POI {self.id}: distance {self.distance!r} must be >= 0")

    @property
    def azimuth_degrees(self) -> float:
        """Azimuth in degrees, for display."""
        return math.degrees(self.azimuth)


def normalize_azimuth(angle: float) -> float:
    """Wrap an angle in radians into [0, 2pi)."""
    angle = angle % (2 * math.pi)
    # -tiny % 2pi rounds to exactly 2pi
    if angle >= 2 * math.pi:
        angle = 0.0
    return angle


def _parse_id(value) -> int:
    """Parse a POI id, rejecting fractional numbers instead of truncating them."""
    if isinstance(value, bool):
        raise ValueError(f"POI id must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"POI id must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        value = value.strip()
    try:
        return int(value)
    except ValueError as err:
        raise ValueError(f"POI id must be an integer, got {value!r}") from err


def poi_from_record(record: dict) -> POI:
    """Build a POI from a dict with id, label, azimuth or azimuth_deg, distance.

    ``label`` defaults to the id. ``azimuth_deg`` is accepted in place of
    ``azimuth`` (radians); both are normalized into [0, 2pi).

    Raises:
        ValueError: On missing or malformed fields.
    """
    try:
        poi_id = _parse_id(record["id"])
        if record.get("azimuth") not in (None, ""):
            azimuth = float(record["azimuth"])
        elif record.get("azimuth_deg") not in (None, ""):
            azimuth = math.radians(float(record["azimuth_deg"]))
        else:
            raise ValueError(f"POI {poi_id}: needs 'azimuth' or 'azimuth_deg'")
        distance = float(record["distance"])
    except KeyError as err:
        raise ValueError(f"POI record missing field {err}: {record!r}") from err
    except TypeError as err:
        raise ValueError(f"Malformed POI record: {record!r}") from err

    label = record.get("label")
    if label in (None, ""):
        label = str(poi_id)

    return POI(
        id=poi_id,
        label=str(label),
        azimuth=normalize_azimuth(azimuth),
        distance=distance,
    )


def load_pois(path: Path) -> list[POI]:
    """Load POIs from a JSON or CSV file.

    JSON may be a list of records or an object with a "pois" list. CSV needs
    a header row with the record field names.

    Args:
        path: Input file (.json or .csv).

    Returns:
        POIs in file order.

    Raises:
        ValueError: On an unsupported suffix, malformed records or duplicate ids.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path) as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("pois", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of POI records in {path}")
        records = data
    elif suffix == ".csv":
        with open(path, newline="") as f:
            records = list(csv.DictReader(f))
    else:
        raise ValueError(f"Unsupported POI file type '{path.suffix}' (expected .json or .csv)")

    pois = [poi_from_record(r) for r in records]

    seen: set[int] = set()
    for poi in pois:
        if poi.id in seen:
            raise ValueError(f"Duplicate POI id {poi.id} in {path}")
        seen.add(poi.id)

    return pois


def sort_by_distance(pois: list[POI]) -> list[POI]:
    """Stable ascending sort by distance (nearest first)."""
    return sorted(pois, key=lambda p: p.distance)


def is_sorted_by_distance(pois: list[POI]) -> bool:
    """True if distances never decrease along the list."""
    return all(a.distance <= b.distance for a, b in zip(pois, pois[1:]))
