"""Post-placement verification of ring sets."""

from collections.abc import Iterable
from itertools import combinations

import networkx as nx

from .assign import RingSet
from .geometry import angular_distance

# Absorbs float noise when re-checking separations read back from disk
SEPARATION_TOLERANCE = 1e-9


def build_overlap_graph(ring_set: RingSet) -> nx.Graph:
    """Build a graph of label overlaps between POIs on the same ring.

    Every placed POI is a node (attributes: ring, azimuth, label). An edge
    joins two POIs on the same ring whose circular angular distance is below
    that ring's min separation (attributes: ring, separation, required).

    Args:
        ring_set: Placement to check.

    Returns:
        NetworkX Graph; no edges means no ring has overlapping labels.
    """
    G = nx.Graph()

    for ring in ring_set:
        for azimuth, poi in ring.members.items():
            G.add_node(poi.id, ring=ring.index, azimuth=azimuth, label=poi.label)

    for ring in ring_set:
        for (azi_a, poi_a), (azi_b, poi_b) in combinations(ring.members.items(), 2):
            separation = angular_distance(azi_a, azi_b)
            if separation < ring.min_separation - SEPARATION_TOLERANCE:
                G.add_edge(
                    poi_a.id,
                    poi_b.id,
                    ring=ring.index,
                    separation=separation,
                    required=ring.min_separation,
                )

    return G


def verify_ring_set(
    ring_set: RingSet,
    expected_ids: Iterable[int] | None = None,
) -> list[str]:
    """Check a placement for overlaps, radius order and lost or repeated POIs.

    Args:
        ring_set: Placement to check.
        expected_ids: Ids of every input POI. When given, each must appear
            exactly once across the rings and the unplaced list.

    Returns:
        Human-readable problem descriptions; empty if the placement is valid.
    """
    problems: list[str] = []

    overlaps = build_overlap_graph(ring_set)
    for a, b, data in sorted(overlaps.edges(data=True), key=lambda e: (e[2]["ring"], e[0], e[1])):
        problems.append(
            f"Ring {data['ring']}: POIs {a} and {b} are {data['separation']:.4f} rad apart "
            f"(minimum {data['required']:.4f})"
        )

    for inner, outer in zip(ring_set.rings, ring_set.rings[1:]):
        if not inner.radius < outer.radius:
            problems.append(
                f"Ring {outer.index} radius {outer.radius:g} is not larger than "
                f"ring {inner.index} radius {inner.radius:g}"
            )

    counts: dict[int, int] = {}
    for ring in ring_set:
        for poi in ring.members.values():
            counts[poi.id] = counts.get(poi.id, 0) + 1
    for poi in ring_set.unplaced:
        counts[poi.id] = counts.get(poi.id, 0) + 1

    for poi_id, count in sorted(counts.items()):
        if count > 1:
            problems.append(f"POI {poi_id} appears {count} times")

    if expected_ids is not None:
        expected = set(expected_ids)
        for poi_id in sorted(expected - counts.keys()):
            problems.append(f"POI {poi_id} is missing from the placement")
        for poi_id in sorted(counts.keys() - expected):
            problems.append(f"POI {poi_id} is not in the input")

    return problems
