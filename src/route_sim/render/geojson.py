"""GeoJSON payloads for the map layer — marker point plus traveled line."""

from __future__ import annotations

from route_sim.geo.models import GeoPoint, PathProjection
from route_sim.geo.path_index import PathIndex
from route_sim.simulation.models import SimulationTick


def marker_feature(position: GeoPoint) -> dict:
    """Return a GeoJSON ``Point`` feature for the traveler marker."""
    return {
        "type": "Feature",
        "properties": {"role": "marker"},
        "geometry": {"type": "Point", "coordinates": position.to_list()},
    }


def traveled_feature(index: PathIndex, projection: PathProjection) -> dict:
    """Return a GeoJSON ``LineString`` feature from the path start to *projection*.

    A projection at the very start collapses to a single vertex; it is
    repeated so the LineString stays valid (two positions minimum).
    """
    coords = [p.to_list() for p in index.traveled(projection)]
    if len(coords) == 1:
        coords.append(list(coords[0]))
    return {
        "type": "Feature",
        "properties": {"role": "traveled", "distance": projection.distance},
        "geometry": {"type": "LineString", "coordinates": coords},
    }


def route_feature(index: PathIndex) -> dict:
    """Return the whole route as a GeoJSON ``LineString`` feature."""
    return {
        "type": "Feature",
        "properties": {"role": "route", "length": index.total_length()},
        "geometry": {
            "type": "LineString",
            "coordinates": [p.to_list() for p in index.points],
        },
    }


class RouteRenderer:
    """Formats simulation ticks for a map SDK's shape sources.

    Pure data transformations with no side effects — safe to call from any
    thread, including directly from a simulator listener.
    """

    def __init__(self, index: PathIndex) -> None:
        self._index = index

    def format_progress(self, distance: float) -> str:
        """Format *distance* as a percentage of the route length.

        Examples
        --------
        >>> from route_sim.geo.path_index import PathIndex
        >>> RouteRenderer(PathIndex([(0, 0), (0, 2)], metric="planar")).format_progress(0.5)
        '25.0%'
        """
        pct = 100.0 * distance / self._index.total_length()
        return f"{min(max(pct, 0.0), 100.0):.1f}%"

    def render(self, tick: SimulationTick) -> dict:
        """Return a ``FeatureCollection`` (marker + traveled line) for *tick*."""
        return {
            "type": "FeatureCollection",
            "properties": {
                "tick": tick.tick,
                "progress": self.format_progress(tick.distance),
                "final": tick.final,
            },
            "features": [
                traveled_feature(self._index, tick.projection),
                marker_feature(tick.position),
            ],
        }
