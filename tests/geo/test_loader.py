"""Tests for loading route paths from GeoJSON and directions responses."""

from __future__ import annotations

import json

import pytest

from route_sim.errors import InvalidPathError
from route_sim.geo.loader import load_path, parse_path
from route_sim.geo.models import GeoPoint

_COORDS = [[2.3744, 48.9052], [2.36, 48.88], [2.3488, 48.8534]]
_EXPECTED = [GeoPoint(*c) for c in _COORDS]


def _line() -> dict:
    return {"type": "LineString", "coordinates": _COORDS}


# ---------------------------------------------------------------------------
# parse_path
# ---------------------------------------------------------------------------


def test_parse_line_string():
    assert parse_path(_line()) == _EXPECTED


def test_parse_feature():
    assert parse_path({"type": "Feature", "properties": {}, "geometry": _line()}) == _EXPECTED


def test_parse_feature_collection_skips_non_line_features():
    fc = {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0.0, 0.0]}},
            {"type": "Feature", "geometry": _line()},
        ],
    }
    assert parse_path(fc) == _EXPECTED


def test_parse_directions_response_uses_first_route():
    response = {
        "code": "Ok",
        "routes": [
            {"geometry": _line(), "distance": 6100.0},
            {"geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}},
        ],
    }
    assert parse_path(response) == _EXPECTED


def test_parse_extra_altitude_is_ignored():
    path = parse_path({"type": "LineString", "coordinates": [[1.0, 2.0, 35.0], [3.0, 4.0, 40.0]]})
    assert path == [GeoPoint(1.0, 2.0), GeoPoint(3.0, 4.0)]


def test_parse_directions_without_routes_raises():
    with pytest.raises(InvalidPathError):
        parse_path({"code": "NoRoute", "routes": []})


def test_parse_feature_collection_without_line_raises():
    with pytest.raises(InvalidPathError):
        parse_path({"type": "FeatureCollection", "features": []})


def test_parse_unsupported_type_raises():
    with pytest.raises(InvalidPathError):
        parse_path({"type": "Polygon", "coordinates": []})


def test_parse_malformed_coordinate_raises():
    with pytest.raises(InvalidPathError):
        parse_path({"type": "LineString", "coordinates": [[0.0, 0.0], [1.0]]})


def test_parse_non_object_raises():
    with pytest.raises(InvalidPathError):
        parse_path([[0.0, 0.0], [1.0, 1.0]])


# ---------------------------------------------------------------------------
# load_path
# ---------------------------------------------------------------------------


def test_load_from_dict():
    assert load_path(_line()) == _EXPECTED


def test_load_from_json_string():
    assert load_path(json.dumps(_line())) == _EXPECTED


def test_load_from_file(tmp_path):
    f = tmp_path / "route.geojson"
    f.write_text(json.dumps({"type": "Feature", "geometry": _line()}), encoding="utf-8")
    assert load_path(f) == _EXPECTED
    assert load_path(str(f)) == _EXPECTED


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(InvalidPathError):
        load_path(tmp_path / "missing.geojson")


def test_load_invalid_json_raises():
    with pytest.raises(InvalidPathError):
        load_path("{not json")


@pytest.mark.parametrize(
    "text",
    [
        '{"routes": [1]}',
        '{"routes": {"a": 1}}',
        '{"type": "FeatureCollection", "features": ["x"]}',
        '{"type": "FeatureCollection", "features": {"a": 1}}',
        '{"type": "Feature", "geometry": 7}',
    ],
)
def test_load_malformed_shapes_raise_invalid_path(text):
    with pytest.raises(InvalidPathError):
        load_path(text)


def test_load_file_not_utf8_raises(tmp_path):
    f = tmp_path / "route.geojson"
    f.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(InvalidPathError):
        load_path(f)
