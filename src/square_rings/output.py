"""Write and read placement results."""

import csv
import json
import math
from pathlib import Path

from .placement import DuplicateAzimuthError, Ring, RingSet
from .pois import POI


def _poi_dict(poi: POI) -> dict:
    return {
        "id": poi.id,
        "label": poi.label,
        "azimuth": poi.azimuth,
        "distance": poi.distance,
    }


def placement_to_dict(ring_set: RingSet) -> dict:
    """Serializable view of a placement: parameters, rings and unplaced POIs."""
    rings = []
    for ring in ring_set:
        positions = ring.positions()
        members = []
        for azimuth, poi in ring.members.items():
            x, y = positions[azimuth]
            members.append({**_poi_dict(poi), "x": x, "y": y})
        rings.append(
            {
                "index": ring.index,
                "radius": ring.radius,
                "min_separation": ring.min_separation,
                "members": members,
            }
        )

    return {
        "poi_width": ring_set.poi_width,
        "scatter_coefficient": ring_set.scatter_coefficient,
        "max_rings": ring_set.max_rings,
        "total_placed": ring_set.placed_count,
        "rings": rings,
        "unplaced": [_poi_dict(poi) for poi in ring_set.unplaced],
    }


def generate_json(ring_set: RingSet, output_file: Path) -> None:
    """Write the placement as JSON.

    Args:
        ring_set: Placement to write.
        output_file: Path to write the JSON file.
    """
    with open(output_file, "w") as f:
        json.dump(placement_to_dict(ring_set), f, indent=2)


def generate_csv(ring_set: RingSet, output_file: Path) -> None:
    """Write one CSV row per placed POI, ordered by ring then azimuth.

    Args:
        ring_set: Placement to write.
        output_file: Path to write the CSV file.
    """
    fieldnames = [
        "id", "label", "ring", "radius", "azimuth", "azimuth_deg", "distance", "x", "y",
    ]

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for ring in ring_set:
            positions = ring.positions()
            for azimuth, poi in ring.members.items():
                x, y = positions[azimuth]
                writer.writerow(
                    {
                        "id": poi.id,
                        "label": poi.label,
                        "ring": ring.index,
                        "radius": ring.radius,
                        "azimuth": poi.azimuth,
                        "azimuth_deg": poi.azimuth_degrees,
                        "distance": poi.distance,
                        "x": x,
                        "y": y,
                    }
                )


def generate_summary(ring_set: RingSet, output_file: Path) -> None:
    """Write a human-readable summary of the placement.

    Args:
        ring_set: Placement to summarize.
        output_file: Path to write the summary file.
    """
    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write("Square Rings Placement Summary\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"POI width: {ring_set.poi_width:g}\n")
        f.write(f"Scatter coefficient: {ring_set.scatter_coefficient:g}\n")
        if ring_set.max_rings is not None:
            f.write(f"Max rings: {ring_set.max_rings}\n")
        f.write(f"Placed POIs: {ring_set.placed_count}\n")
        f.write(f"Unplaced POIs: {len(ring_set.unplaced)}\n")
        f.write(f"Rings: {len(ring_set)}\n\n")

        if len(ring_set):
            f.write("Ring  Radius    Min sep (deg)  POIs\n")
            f.write("-" * 40 + "\n")
            for ring in ring_set:
                f.write(
                    f"{ring.index:4d}  {ring.radius:8.1f}  "
                    f"{math.degrees(ring.min_separation):13.2f}  {len(ring):4d}\n"
                )

        if ring_set.unplaced:
            f.write("\nUnplaced:\n")
            f.write("-" * 40 + "\n")
            for poi in ring_set.unplaced:
                f.write(f"  {poi.id:6d}  {poi.label}\n")


def _poi_from_json(record: dict) -> POI:
    return POI(
        id=int(record["id"]),
        label=str(record["label"]),
        azimuth=float(record["azimuth"]),
        distance=float(record["distance"]),
    )


def load_placement(path: Path) -> RingSet:
    """Read a placement written by generate_json.

    Ring radii and min separations are taken from the file as written, not
    recomputed, so a check sees exactly what was stored.

    Raises:
        ValueError: If the file is malformed or a ring repeats an azimuth.
    """
    with open(path) as f:
        data = json.load(f)

    try:
        ring_set = RingSet(
            poi_width=float(data["poi_width"]),
            scatter_coefficient=float(data["scatter_coefficient"]),
            max_rings=data.get("max_rings"),
        )
        for ring_data in data["rings"]:
            ring = Ring(
                index=int(ring_data["index"]),
                radius=float(ring_data["radius"]),
                min_separation=float(ring_data["min_separation"]),
            )
            for record in ring_data["members"]:
                poi = _poi_from_json(record)
                try:
                    ring.members.insert(poi.azimuth, poi)
                except DuplicateAzimuthError as err:
                    raise ValueError(
                        f"Ring {ring.index}: POI {poi.id} repeats azimuth {poi.azimuth!r}"
                    ) from err
            ring_set.rings.append(ring)
        ring_set.unplaced = [_poi_from_json(r) for r in data.get("unplaced", [])]
    except (KeyError, TypeError) as err:
        raise ValueError(f"Malformed placement file {path}: {err}") from err

    return ring_set
