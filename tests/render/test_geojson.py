"""Tests for GeoJSON rendering payloads."""

from __future__ import annotations

import pytest

from route_sim.geo.models import GeoPoint
from route_sim.geo.path_index import PathIndex
from route_sim.render.geojson import (
    RouteRenderer,
    marker_feature,
    route_feature,
    traveled_feature,
)
from route_sim.simulation.config import SimulationConfig
from route_sim.simulation.ticks import iter_ticks


@pytest.fixture
def index() -> PathIndex:
    return PathIndex.build([(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)], metric="planar")


def test_marker_feature():
    f = marker_feature(GeoPoint(2.35, 48.85))
    assert f["type"] == "Feature"
    assert f["geometry"] == {"type": "Point", "coordinates": [2.35, 48.85]}


def test_route_feature_covers_all_points(index):
    f = route_feature(index)
    assert f["geometry"]["coordinates"] == [[0.0, 0.0], [0.0, 1.0], [1.0, 1.0]]
    assert f["properties"]["length"] == pytest.approx(2.0)


def test_traveled_feature_mid_route(index):
    f = traveled_feature(index, index.project((0.5, 1.0)))
    assert f["geometry"]["type"] == "LineString"
    assert f["geometry"]["coordinates"] == [[0.0, 0.0], [0.0, 1.0], [0.5, 1.0]]
    assert f["properties"]["distance"] == pytest.approx(1.5)


def test_traveled_feature_at_start_stays_valid_line(index):
    f = traveled_feature(index, index.project((0.0, 0.0)))
    assert f["geometry"]["coordinates"] == [[0.0, 0.0], [0.0, 0.0]]


@pytest.mark.parametrize(
    "distance, expected",
    [(0.0, "0.0%"), (1.0, "50.0%"), (2.0, "100.0%"), (3.0, "100.0%")],
)
def test_format_progress(index, distance, expected):
    assert RouteRenderer(index).format_progress(distance) == expected


def test_render_tick(index):
    cfg = SimulationConfig(speed_mps=1.0, metric="planar")
    first = next(iter_ticks(index, cfg))
    fc = RouteRenderer(index).render(first)

    assert fc["type"] == "FeatureCollection"
    assert fc["properties"] == {"tick": 1, "progress": "50.0%", "final": False}
    line, marker = fc["features"]
    assert line["geometry"]["coordinates"] == [[0.0, 0.0], [0.0, 1.0]]
    assert marker["geometry"]["coordinates"] == [0.0, 1.0]
