"""Smoke test to verify the toolchain works."""


def test_import_route_sim():
    """Verify the route_sim package can be imported."""
    import route_sim

    assert route_sim.__version__ == "0.1.0"


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import route_sim.geo
    import route_sim.render.geojson
    import route_sim.simulation
    import route_sim.web.app

    assert route_sim.geo is not None
    assert route_sim.simulation is not None
    assert route_sim.render.geojson is not None
    assert route_sim.web.app is not None
