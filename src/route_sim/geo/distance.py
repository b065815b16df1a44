"""Distance metrics.

A :class:`PathIndex` uses exactly one metric for segment lengths, projection
offsets and interpolation. Mixing metrics breaks the monotonicity of
cumulative distance, so the metric is chosen once, by name, at index build
time.
"""

from __future__ import annotations

import math
from typing import Protocol

from route_sim.errors import InvalidConfigurationError
from route_sim.geo.models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in metres between two points."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = lat2 - lat1
    dlon = math.radians(b.lon - a.lon)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def wrap_lon(lon: float) -> float:
    """Map a longitude (or longitude delta) into ``[-180, 180)``."""
    if -180.0 <= lon < 180.0:
        return lon
    return (lon + 180.0) % 360.0 - 180.0


class Metric(Protocol):
    """Distance function, local planar frame and interpolation for one coordinate space."""

    name: str

    def distance(self, a: GeoPoint, b: GeoPoint) -> float: ...

    def to_plane(self, origin: GeoPoint, p: GeoPoint) -> tuple[float, float]: ...

    def interpolate(self, a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint: ...


class HaversineMetric:
    """Great-circle metric; distances in metres.

    ``to_plane`` is an equirectangular approximation around *origin*, which is
    accurate at segment scale and only used to find the projection fraction.
    Longitude deltas take the short way round, so a segment crossing the
    antimeridian is measured, projected and interpolated across it.
    """

    name = "haversine"

    def distance(self, a: GeoPoint, b: GeoPoint) -> float:
        return haversine_m(a, b)

    def to_plane(self, origin: GeoPoint, p: GeoPoint) -> tuple[float, float]:
        k = math.cos(math.radians(origin.lat))
        x = EARTH_RADIUS_M * math.radians(wrap_lon(p.lon - origin.lon)) * k
        y = EARTH_RADIUS_M * math.radians(p.lat - origin.lat)
        return x, y

    def interpolate(self, a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
        dlon = wrap_lon(b.lon - a.lon)
        return GeoPoint(
            lon=wrap_lon(a.lon + t * dlon),
            lat=a.lat + t * (b.lat - a.lat),
        )


class PlanarMetric:
    """Euclidean metric in raw coordinate units (screen or projected CRS)."""

    name = "planar"

    def distance(self, a: GeoPoint, b: GeoPoint) -> float:
        return math.hypot(b.lon - a.lon, b.lat - a.lat)

    def to_plane(self, origin: GeoPoint, p: GeoPoint) -> tuple[float, float]:
        return p.lon - origin.lon, p.lat - origin.lat

    def interpolate(self, a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
        return GeoPoint(
            lon=a.lon + t * (b.lon - a.lon),
            lat=a.lat + t * (b.lat - a.lat),
        )


_METRICS: dict[str, type] = {
    HaversineMetric.name: HaversineMetric,
    PlanarMetric.name: PlanarMetric,
}


def get_metric(name: str | Metric = "haversine") -> Metric:
    """Return the metric registered under *name* (metric objects pass through).

    Raises:
        InvalidConfigurationError: If *name* is not a known metric.
    """
    if not isinstance(name, str):
        return name
    try:
        return _METRICS[name]()
    except KeyError:
        known = ", ".join(sorted(_METRICS))
        raise InvalidConfigurationError(
            f"Unknown metric {name!r} (expected one of: {known})"
        ) from None
