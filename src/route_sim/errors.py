"""Exception hierarchy shared by the geometry and simulation layers."""

from __future__ import annotations


class RouteSimError(Exception):
    """Base class for every error raised by route_sim."""


class InvalidPathError(RouteSimError, ValueError):
    """Raised when a path has fewer than two points, zero length, or cannot be parsed."""


class InvalidConfigurationError(RouteSimError, ValueError):
    """Raised when a simulation is configured with a non-positive speed or tick interval."""


class InvalidStateError(RouteSimError, RuntimeError):
    """Raised when an operation is not allowed in the simulator's current state."""
