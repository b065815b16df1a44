"""Pure tick generation — the positions a simulator emits, without the waiting."""

from __future__ import annotations

from collections.abc import Iterator

from route_sim.geo.path_index import PathIndex
from route_sim.simulation.config import SimulationConfig
from route_sim.simulation.models import SimulationTick


def iter_ticks(index: PathIndex, config: SimulationConfig) -> Iterator[SimulationTick]:
    """Yield every tick of a simulation over *index*, ending with the final tick.

    Tick ``k`` sits at ``min(k * step_distance, total_length)``.  The distance
    is recomputed from ``k`` each time rather than accumulated, so it does not
    drift over long routes.

    Raises:
        InvalidConfigurationError: On the first ``next()`` if speed or tick
            interval is non-positive.
    """
    config.check()
    total = index.total_length()
    step = config.step_distance

    k = 0
    while True:
        k += 1
        distance = min(k * step, total)
        position = index.point_at_distance(distance)
        final = distance >= total
        yield SimulationTick(
            tick=k,
            distance=distance,
            position=position,
            projection=index.project(position),
            final=final,
        )
        if final:
            return
