"""Simulation data structures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from route_sim.geo.models import GeoPoint, PathProjection


class SimulatorStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class SimulationTick:
    """One advancement step delivered to listeners."""

    tick: int
    """1-based tick number."""

    distance: float
    """Cumulative distance of :attr:`position` from the path start."""

    position: GeoPoint
    """Where the traveler is now (marker position)."""

    projection: PathProjection
    """Projection of :attr:`position` onto the path (drives the traveled line)."""

    final: bool = False
    """True for the tick that reaches the end of the path."""


Listener = Callable[[SimulationTick], None]


@dataclass(frozen=True)
class ListenerHandle:
    """Opaque token returned by ``add_listener``; pass it to ``remove_listener``."""

    id: int


@dataclass
class SimulationState:
    """Mutable state owned by a single :class:`RouteSimulator`."""

    status: SimulatorStatus = SimulatorStatus.IDLE
    distance: float = 0.0
    tick_count: int = 0
    last_position: GeoPoint | None = None
    listeners: dict[int, Listener] = field(default_factory=dict, repr=False)
