"""Radial label placement on concentric rings.

POIs are taken nearest first and each is put on the innermost ring where its
square label does not angularly overlap any label already on that ring.
"""

from .assign import CapacityError, Ring, RingSet, arrange_pois, place_poi
from .geometry import (
    DEFAULT_SCATTER_COEFFICIENT,
    ConfigurationError,
    angular_distance,
    min_angular_separation,
    polar_to_cartesian,
    ring_radius,
    validate_geometry,
)
from .overlap import build_overlap_graph, verify_ring_set
from .storage import DuplicateAzimuthError, RingMembers

__all__ = [
    "DEFAULT_SCATTER_COEFFICIENT",
    "ConfigurationError",
    "ring_radius",
    "min_angular_separation",
    "validate_geometry",
    "angular_distance",
    "polar_to_cartesian",
    "DuplicateAzimuthError",
    "RingMembers",
    "CapacityError",
    "Ring",
    "RingSet",
    "place_poi",
    "arrange_pois",
    "build_overlap_graph",
    "verify_ring_set",
]
