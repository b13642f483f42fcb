"""Ring radius and minimum label separation geometry."""

import math

DEFAULT_SCATTER_COEFFICIENT = 1.2

TWO_PI = 2 * math.pi


class ConfigurationError(ValueError):
    """Raised when poi_width / scatter settings cannot produce a valid ring."""


def ring_radius(poi_width: float, ring_index: int) -> float:
    """Radius of a ring, evenly spaced at multiples of twice the label width."""
    return (ring_index + 1) * poi_width * 2


def _asin_argument(poi_width: float, ring_index: int) -> float:
    # Half the label diagonal over the ring radius
    return poi_width / math.sqrt(2) / ring_radius(poi_width, ring_index)


def min_angular_separation(
    poi_width: float,
    ring_index: int,
    scatter_coefficient: float = DEFAULT_SCATTER_COEFFICIENT,
) -> float:
    """Minimum angle between two labels on the same ring.

    Labels are approximated by circles of radius ``poi_width / sqrt(2)``.
    ``asin(half_chord / radius) * 2`` is the angle subtended by the chord
    two such circles need, inflated by the scatter coefficient.

    Args:
        poi_width: Side length of the square label.
        ring_index: 0-based ring index.
        scatter_coefficient: Multiplier (>= 1) leaving room between labels.

    Returns:
        Minimum separation in radians.

    Raises:
        ConfigurationError: If the ring is too small for the label size.
    """
    arg = _asin_argument(poi_width, ring_index)
    if arg > 1:
        raise ConfigurationError(
            f"Ring {ring_index} (radius {ring_radius(poi_width, ring_index):g}) "
            f"is too small for poi_width={poi_width:g}"
        )
    return math.asin(arg) * 2 * scatter_coefficient


def validate_geometry(
    poi_width: float,
    scatter_coefficient: float = DEFAULT_SCATTER_COEFFICIENT,
    max_rings: int | None = None,
) -> None:
    """Check placement parameters once, before any POI is processed.

    Raises:
        ConfigurationError: On a non-positive width, a scatter coefficient
            below 1, a max_rings below 1, or an innermost ring too small
            for the label.
    """
    if not math.isfinite(poi_width) or poi_width <= 0:
        raise ConfigurationError(f"poi_width must be a positive number, got {poi_width!r}")
    if not math.isfinite(scatter_coefficient) or scatter_coefficient < 1:
        raise ConfigurationError(
            f"scatter_coefficient must be >= 1, got {scatter_coefficient!r}"
        )
    if max_rings is not None and max_rings < 1:
        raise ConfigurationError(f"max_rings must be >= 1, got {max_rings!r}")
    # Radii grow with the index, so ring 0 is the only one that can fail
    min_angular_separation(poi_width, 0, scatter_coefficient)


def angular_distance(a: float, b: float) -> float:
    """Circular distance between two azimuths, in [0, pi]."""
    diff = abs(a - b) % TWO_PI
    return min(diff, TWO_PI - diff)


def polar_to_cartesian(radius: float, azimuth: float) -> tuple[float, float]:
    """Convert a (radius, azimuth) pair to (x, y)."""
    return radius * math.cos(azimuth), radius * math.sin(azimuth)
