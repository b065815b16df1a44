"""Geometry data structures."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A ``(longitude, latitude)`` pair in decimal degrees.

    No altitude and no coordinate-system transform: whatever the caller
    supplies is what the path is made of.
    """

    lon: float
    """Longitude (x)."""

    lat: float
    """Latitude (y)."""

    @classmethod
    def of(cls, value: GeoPoint | Sequence[float]) -> GeoPoint:
        """Coerce a :class:`GeoPoint` or a ``[lon, lat]`` pair into a GeoPoint.

        Raises:
            ValueError: If *value* is not a pair of finite numbers.
        """
        if isinstance(value, GeoPoint):
            return value
        if isinstance(value, (str, bytes)) or len(value) < 2:
            raise ValueError(f"Expected a [lon, lat] pair, got {value!r}")
        lon, lat = float(value[0]), float(value[1])
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise ValueError(f"Coordinates must be finite, got {value!r}")
        return cls(lon=lon, lat=lat)

    def to_list(self) -> list[float]:
        """Return ``[lon, lat]`` (GeoJSON position order)."""
        return [self.lon, self.lat]


@dataclass(frozen=True)
class PathProjection:
    """Result of projecting an arbitrary point onto a path."""

    segment_index: int
    """Index ``i`` of the segment ``(V[i], V[i+1])`` the projection falls on."""

    point: GeoPoint
    """The projected point on the path."""

    distance: float
    """Cumulative distance from the path start to :attr:`point`."""

    offset: float
    """Distance from the query point to :attr:`point` (0 for on-path queries)."""
