"""Timed route simulation.

Public API
----------
RouteSimulator    - IDLE -> RUNNING -> STOPPED tick driver with listeners
SimulationConfig  - tick interval, speed and metric (pydantic)
SimulationTick    - value delivered to listeners on every tick
TickQueue         - drop-oldest listener for handing ticks to another thread
iter_ticks        - the same tick sequence without any waiting
"""

from route_sim.simulation.config import SimulationConfig
from route_sim.simulation.models import (
    ListenerHandle,
    SimulationState,
    SimulationTick,
    SimulatorStatus,
)
from route_sim.simulation.simulator import RouteSimulator
from route_sim.simulation.tick_queue import TickQueue
from route_sim.simulation.ticks import iter_ticks

__all__ = [
    "ListenerHandle",
    "RouteSimulator",
    "SimulationConfig",
    "SimulationState",
    "SimulationTick",
    "SimulatorStatus",
    "TickQueue",
    "iter_ticks",
]
