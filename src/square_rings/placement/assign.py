"""Greedy assignment of POIs to concentric label rings."""

import math
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..pois import POI, is_sorted_by_distance
from .geometry import (
    DEFAULT_SCATTER_COEFFICIENT,
    TWO_PI,
    min_angular_separation,
    polar_to_cartesian,
    ring_radius,
    validate_geometry,
)
from .storage import RingMembers


class CapacityError(RuntimeError):
    """Raised when a POI does not fit on any ring below max_rings."""

    def __init__(self, poi: POI, max_rings: int) -> None:
        super().__init__(f"POI {poi.id} ({poi.label!r}) does not fit within {max_rings} ring(s)")
        self.poi = poi
        self.max_rings = max_rings


@dataclass
class Ring:
    """A concentric ring holding POIs keyed by azimuth."""

    index: int
    radius: float
    min_separation: float
    members: RingMembers = field(default_factory=RingMembers)

    def __len__(self) -> int:
        return len(self.members)

    def pois(self) -> list[POI]:
        """Members in ascending azimuth order."""
        return self.members.values()

    def positions(self) -> dict[float, tuple[float, float]]:
        """Label centre (x, y) for each member, keyed by azimuth like the members."""
        return {azimuth: polar_to_cartesian(self.radius, azimuth) for azimuth in self.members}


@dataclass
class RingSet:
    """Rings created so far, plus POIs that hit the ring cap."""

    poi_width: float
    scatter_coefficient: float = DEFAULT_SCATTER_COEFFICIENT
    max_rings: int | None = None
    rings: list[Ring] = field(default_factory=list)
    unplaced: list[POI] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rings)

    def __iter__(self) -> Iterator[Ring]:
        return iter(self.rings)

    def __getitem__(self, index: int) -> Ring:
        return self.rings[index]

    def ring(self, index: int) -> Ring:
        """Return ring `index`, creating it (and any below it) if needed."""
        while len(self.rings) <= index:
            i = len(self.rings)
            self.rings.append(
                Ring(
                    index=i,
                    radius=ring_radius(self.poi_width, i),
                    min_separation=min_angular_separation(
                        self.poi_width, i, self.scatter_coefficient
                    ),
                )
            )
        return self.rings[index]

    @property
    def placed_count(self) -> int:
        return sum(len(r) for r in self.rings)

    def find(self, poi_id: int) -> int | None:
        """Index of the ring holding poi_id, or None."""
        for ring in self.rings:
            if any(poi.id == poi_id for poi in ring.members.values()):
                return ring.index
        return None


def _format_angle(angle: float) -> str:
    return f"{math.degrees(angle):.3f}|{angle:.5f}"


def _find_conflict(ring: Ring, azimuth: float) -> str | None:
    """Describe the neighbor closer than the ring's min separation, or None.

    Checks the nearest member at or above the azimuth (wrapping to the
    smallest member) and the nearest member below it (wrapping to the
    largest member).
    """
    min_sep = ring.min_separation

    above = ring.members.nearest_at_or_above(azimuth)
    if above is not None:
        azi, _ = above
        if azi - azimuth < min_sep:
            return f"nearest ge azimuth(deg|rad): {_format_angle(azi)}"
    else:
        azi, _ = ring.members.smallest()
        if azi + TWO_PI - azimuth < min_sep:
            return f"minimum azimuth(deg|rad): {_format_angle(azi)}"

    below = ring.members.nearest_below(azimuth)
    if below is not None:
        azi, _ = below
        if azimuth - azi < min_sep:
            return f"nearest lt azimuth(deg|rad): {_format_angle(azi)}"
    else:
        azi, _ = ring.members.largest()
        if azimuth + TWO_PI - azi < min_sep:
            return f"maximum azimuth(deg|rad): {_format_angle(azi)}"

    return None


def place_poi(ring_set: RingSet, poi: POI, verbose: bool = False) -> int:
    """Place one POI on the lowest ring where it does not overlap.

    Rings are tried in increasing index order; ring_set is only ever
    appended to, so earlier placements never move.

    Args:
        ring_set: Rings built so far (mutated).
        poi: POI to place at its own azimuth.
        verbose: Print the per-ring placement trace.

    Returns:
        Index of the ring the POI was inserted into.

    Raises:
        CapacityError: If ring_set.max_rings is set and every allowed ring
            conflicts.
    """
    if verbose:
        print(f"{poi!r}, azimuth(deg|rad): {_format_angle(poi.azimuth)}")

    ring_index = 0
    while True:
        if ring_set.max_rings is not None and ring_index >= ring_set.max_rings:
            raise CapacityError(poi, ring_set.max_rings)

        ring = ring_set.ring(ring_index)
        if verbose:
            print(f"\tring {ring_index}, min_azi(deg|rad): {_format_angle(ring.min_separation)}")

        if not ring.members.is_empty():
            conflict = _find_conflict(ring, poi.azimuth)
            if conflict is not None:
                if verbose:
                    print(f"\t\t{conflict}, overlap")
                ring_index += 1
                continue

        if verbose:
            print("\t\tno overlap, insert")
        ring.members.insert(poi.azimuth, poi)
        return ring_index


def arrange_pois(
    pois: Iterable[POI],
    poi_width: float,
    scatter_coefficient: float = DEFAULT_SCATTER_COEFFICIENT,
    max_rings: int | None = None,
    verbose: bool = False,
) -> RingSet:
    """Assign POIs, nearest first, to non-overlapping concentric rings.

    The input must already be sorted by ascending distance; it is not
    re-sorted here. POIs exceeding max_rings are collected in
    ``RingSet.unplaced`` and the rest of the batch continues.

    Args:
        pois: POIs sorted by ascending distance.
        poi_width: Side length of the square labels.
        scatter_coefficient: Multiplier (>= 1) on the minimum separation.
        max_rings: Optional cap on the number of rings.
        verbose: Print the per-POI placement trace.

    Returns:
        The populated RingSet.

    Raises:
        ConfigurationError: If the parameters are invalid. Raised before any
            POI is processed.
    """
    validate_geometry(poi_width, scatter_coefficient, max_rings)

    pois = list(pois)
    if not is_sorted_by_distance(pois):
        print(
            "Warning: POIs are not sorted by ascending distance; "
            "inner rings will not favor the nearest POIs",
            file=sys.stderr,
        )

    ring_set = RingSet(
        poi_width=poi_width,
        scatter_coefficient=scatter_coefficient,
        max_rings=max_rings,
    )
    for poi in pois:
        try:
            place_poi(ring_set, poi, verbose=verbose)
        except CapacityError as e:
            print(f"Warning: {e}, skipping", file=sys.stderr)
            ring_set.unplaced.append(poi)

    return ring_set
