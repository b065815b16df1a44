"""SimulationService — projection and dry-run simulation for the Web API."""

from __future__ import annotations

import itertools
import logging

from route_sim.geo.models import PathProjection
from route_sim.geo.path_index import PathIndex
from route_sim.render.geojson import RouteRenderer
from route_sim.simulation.config import SimulationConfig
from route_sim.simulation.ticks import iter_ticks
from route_sim.web.schemas import (
    ProjectionModel,
    ProjectRequest,
    ProjectResponse,
    SimulateRequest,
    SimulateResponse,
    TickModel,
)

_logger = logging.getLogger(__name__)


def _projection_model(projection: PathProjection) -> ProjectionModel:
    return ProjectionModel(
        segment_index=projection.segment_index,
        point=(projection.point.lon, projection.point.lat),
        distance=projection.distance,
        offset=projection.offset,
    )


class SimulationService:
    """Stateless wrapper around :class:`PathIndex` and :func:`iter_ticks`.

    Raises :class:`~route_sim.errors.InvalidPathError` and
    :class:`~route_sim.errors.InvalidConfigurationError` unchanged; the web
    layer maps them to HTTP 422.
    """

    def project(self, req: ProjectRequest) -> ProjectResponse:
        index = PathIndex.build(req.path, metric=req.metric)
        projection = index.project(req.point)
        return ProjectResponse(
            total_length=index.total_length(),
            projection=_projection_model(projection),
            traveled=[(p.lon, p.lat) for p in index.traveled(projection)],
        )

    def simulate(self, req: SimulateRequest) -> SimulateResponse:
        """Compute the full tick sequence without waiting between ticks.

        At most ``req.max_ticks`` ticks are returned; ``truncated`` reports
        whether the route end was cut off.
        """
        config = SimulationConfig(
            tick_interval_ms=req.tick_interval_ms,
            speed_mps=req.speed_mps,
            metric=req.metric,
        )
        config.check()
        index = PathIndex.build(req.path, metric=req.metric)
        renderer = RouteRenderer(index) if req.geojson else None

        ticks: list[TickModel] = []
        for tick in itertools.islice(iter_ticks(index, config), req.max_ticks):
            ticks.append(
                TickModel(
                    tick=tick.tick,
                    elapsed_ms=tick.tick * config.tick_interval_ms,
                    distance=tick.distance,
                    position=(tick.position.lon, tick.position.lat),
                    projection=_projection_model(tick.projection),
                    final=tick.final,
                    feature_collection=renderer.render(tick) if renderer else None,
                )
            )

        truncated = not ticks or not ticks[-1].final
        if truncated:
            _logger.warning("Simulation truncated at %d tick(s)", len(ticks))
        return SimulateResponse(
            total_length=index.total_length(),
            tick_count=len(ticks),
            truncated=truncated,
            ticks=ticks,
        )
