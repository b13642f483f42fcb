"""Sorted azimuth -> POI mapping for a single ring."""

from bisect import bisect_left
from collections.abc import Iterator
from typing import Any


class DuplicateAzimuthError(KeyError):
    """Raised when inserting an azimuth that is already stored on the ring."""


class RingMembers:
    """Ordered mapping from azimuth to POI, sorted ascending by azimuth.

    Keys live in a sorted list searched with bisect, so neighbor lookups are
    logarithmic. The mapping knows nothing about circularity; wrap-around at
    0/2pi is handled by the caller via smallest() / largest().
    """

    def __init__(self) -> None:
        self._keys: list[float] = []
        self._values: list[Any] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[float]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (int, float)):
            return False
        i = bisect_left(self._keys, key)
        return i < len(self._keys) and self._keys[i] == key

    def __repr__(self) -> str:
        return f"RingMembers({dict(self.items())!r})"

    def is_empty(self) -> bool:
        """True if no POI has been placed on the ring."""
        return not self._keys

    def keys(self) -> list[float]:
        """Stored azimuths, ascending."""
        return list(self._keys)

    def values(self) -> list[Any]:
        """Stored POIs in ascending azimuth order."""
        return list(self._values)

    def items(self) -> list[tuple[float, Any]]:
        """(azimuth, POI) pairs in ascending azimuth order."""
        return list(zip(self._keys, self._values))

    def get(self, key: float, default: Any = None) -> Any:
        """POI stored at exactly key, or default."""
        i = bisect_left(self._keys, key)
        if i < len(self._keys) and self._keys[i] == key:
            return self._values[i]
        return default

    def nearest_at_or_above(self, key: float) -> tuple[float, Any] | None:
        """Smallest stored (key, value) with stored key >= key, or None."""
        i = bisect_left(self._keys, key)
        if i == len(self._keys):
            return None
        return self._keys[i], self._values[i]

    def nearest_below(self, key: float) -> tuple[float, Any] | None:
        """Largest stored (key, value) with stored key < key, or None."""
        i = bisect_left(self._keys, key)
        if i == 0:
            return None
        return self._keys[i - 1], self._values[i - 1]

    def smallest(self) -> tuple[float, Any] | None:
        """(key, value) with the lowest azimuth, or None if empty."""
        if not self._keys:
            return None
        return self._keys[0], self._values[0]

    def largest(self) -> tuple[float, Any] | None:
        """(key, value) with the highest azimuth, or None if empty."""
        if not self._keys:
            return None
        return self._keys[-1], self._values[-1]

    def insert(self, key: float, value: Any) -> None:
        """Insert value at key, keeping keys sorted.

        Raises:
            DuplicateAzimuthError: If key is already present. The stored
                value is left untouched.
        """
        i = bisect_left(self._keys, key)
        if i < len(self._keys) and self._keys[i] == key:
            raise DuplicateAzimuthError(key)
        self._keys.insert(i, key)
        self._values.insert(i, value)
