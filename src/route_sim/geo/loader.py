"""Load a route path from GeoJSON or a directions-API response.

Accepted shapes (first match wins):

* a ``LineString`` geometry
* a ``Feature`` whose geometry is a LineString
* a ``FeatureCollection`` (its first LineString feature)
* a directions response ``{"routes": [{"geometry": {...}}, ...]}`` (first route)
"""

from __future__ import annotations

import json
import os
from typing import Any

from route_sim.errors import InvalidPathError
from route_sim.geo.models import GeoPoint


def _coordinates(obj: Any) -> list:
    if not isinstance(obj, dict):
        raise InvalidPathError(f"Expected a GeoJSON object, got {type(obj).__name__}")

    if "routes" in obj:
        routes = obj["routes"] or []
        if not isinstance(routes, list):
            raise InvalidPathError("Directions response 'routes' must be a list")
        if not routes:
            raise InvalidPathError("Directions response contains no routes")
        route = routes[0]
        if not isinstance(route, dict):
            raise InvalidPathError("Directions route must be an object")
        return _coordinates(route.get("geometry"))

    kind = obj.get("type")
    if kind == "LineString":
        return obj.get("coordinates") or []
    if kind == "Feature":
        return _coordinates(obj.get("geometry"))
    if kind == "FeatureCollection":
        features = obj.get("features") or []
        if not isinstance(features, list):
            raise InvalidPathError("FeatureCollection 'features' must be a list")
        for feature in features:
            if not isinstance(feature, dict):
                continue
            geometry = feature.get("geometry")
            if isinstance(geometry, dict) and geometry.get("type") == "LineString":
                return geometry.get("coordinates") or []
        raise InvalidPathError("FeatureCollection has no LineString feature")

    raise InvalidPathError(f"Unsupported GeoJSON type: {kind!r}")


def parse_path(obj: dict) -> list[GeoPoint]:
    """Extract the ordered path from a parsed GeoJSON / directions object.

    Raises:
        InvalidPathError: If no LineString is found or a coordinate is malformed.
    """
    coords = _coordinates(obj)
    try:
        return [GeoPoint.of(c) for c in coords]
    except (TypeError, ValueError) as exc:
        raise InvalidPathError(f"Malformed coordinate in LineString: {exc}") from exc


def load_path(source: str | os.PathLike | dict) -> list[GeoPoint]:
    """Load a path from a dict, a JSON string, or a path to a JSON file.

    Raises:
        InvalidPathError: If the source is not valid JSON or holds no usable path.
    """
    if isinstance(source, dict):
        return parse_path(source)

    text = os.fspath(source)
    if not text.lstrip().startswith(("{", "[")):
        try:
            with open(text, encoding="utf-8") as fh:
                text = fh.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidPathError(f"Cannot read path file {text!r}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidPathError(f"Invalid JSON: {exc}") from exc
    return parse_path(data)
