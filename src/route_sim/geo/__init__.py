"""Route geometry: points, distance metrics and the path index.

Public API
----------
GeoPoint        - immutable (lon, lat) pair
PathProjection  - nearest-point query result
PathIndex       - nearest-point / progress index over a fixed path
get_metric      - look up a distance metric by name
load_path       - read a path from GeoJSON or a directions response
"""

from route_sim.geo.distance import HaversineMetric, PlanarMetric, get_metric, haversine_m
from route_sim.geo.loader import load_path, parse_path
from route_sim.geo.models import GeoPoint, PathProjection
from route_sim.geo.path_index import PathIndex

__all__ = [
    "GeoPoint",
    "HaversineMetric",
    "PathIndex",
    "PathProjection",
    "PlanarMetric",
    "get_metric",
    "haversine_m",
    "load_path",
    "parse_path",
]
