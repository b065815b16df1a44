"""Tests for distance metrics."""

from __future__ import annotations

import math

import pytest

from route_sim.errors import InvalidConfigurationError
from route_sim.geo.distance import (
    EARTH_RADIUS_M,
    HaversineMetric,
    PlanarMetric,
    get_metric,
    haversine_m,
    wrap_lon,
)
from route_sim.geo.models import GeoPoint

_ONE_DEGREE_M = EARTH_RADIUS_M * math.pi / 180.0


def test_haversine_one_degree_of_latitude():
    d = haversine_m(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
    assert d == pytest.approx(_ONE_DEGREE_M, rel=1e-9)


def test_haversine_one_degree_of_longitude_on_equator():
    d = haversine_m(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert d == pytest.approx(_ONE_DEGREE_M, rel=1e-9)


def test_haversine_identical_points_is_zero():
    p = GeoPoint(2.3488, 48.8534)
    assert haversine_m(p, p) == 0.0


def test_haversine_is_symmetric():
    a = GeoPoint(2.374400000000037, 48.9052)
    b = GeoPoint(2.3488, 48.8534)
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a))


def test_haversine_paris_demo_walk_is_about_six_km():
    d = haversine_m(GeoPoint(2.374400000000037, 48.9052), GeoPoint(2.3488, 48.8534))
    assert 5_500 < d < 6_500


def test_planar_metric_is_euclidean():
    m = PlanarMetric()
    assert m.distance(GeoPoint(0, 0), GeoPoint(3, 4)) == pytest.approx(5.0)
    assert m.to_plane(GeoPoint(1, 1), GeoPoint(3, 4)) == (2, 3)


def test_haversine_plane_shrinks_longitude_with_latitude():
    m = HaversineMetric()
    x_eq, _ = m.to_plane(GeoPoint(0, 0), GeoPoint(1, 0))
    x_60, _ = m.to_plane(GeoPoint(0, 60), GeoPoint(1, 60))
    assert x_60 == pytest.approx(x_eq / 2, rel=1e-9)


@pytest.mark.parametrize("name, cls", [("haversine", HaversineMetric), ("planar", PlanarMetric)])
def test_get_metric_by_name(name, cls):
    assert isinstance(get_metric(name), cls)


def test_get_metric_passes_objects_through():
    m = PlanarMetric()
    assert get_metric(m) is m


def test_get_metric_unknown_name_raises():
    with pytest.raises(InvalidConfigurationError):
        get_metric("manhattan")


@pytest.mark.parametrize(
    "lon,expected",
    [(0.0, 0.0), (179.5, 179.5), (-180.0, -180.0), (180.0, -180.0), (358.0, -2.0), (-181.0, 179.0)],
)
def test_wrap_lon(lon, expected):
    assert wrap_lon(lon) == pytest.approx(expected)


def test_haversine_interpolate_crosses_antimeridian():
    mid = HaversineMetric().interpolate(GeoPoint(170.0, 10.0), GeoPoint(-170.0, 20.0), 0.5)
    assert abs(mid.lon) == pytest.approx(180.0)
    assert mid.lat == pytest.approx(15.0)
