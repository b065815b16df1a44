"""Simulation configuration — pydantic model with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from route_sim.errors import InvalidConfigurationError

DEFAULT_TICK_INTERVAL_MS = 1000
DEFAULT_SPEED_MPS = 1.4  # walking pace

_ENV_FIELDS = {
    "ROUTE_SIM_TICK_INTERVAL_MS": "tick_interval_ms",
    "ROUTE_SIM_SPEED_MPS": "speed_mps",
    "ROUTE_SIM_METRIC": "metric",
}


class SimulationConfig(BaseModel):
    """Pace and metric of a route simulation.

    Field types are checked on construction; positivity is checked by
    :meth:`check` when a simulation starts, so a bad speed surfaces as
    :class:`InvalidConfigurationError` from ``start()``.
    """

    model_config = ConfigDict(frozen=True)

    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    speed_mps: float = DEFAULT_SPEED_MPS
    metric: Literal["haversine", "planar"] = "haversine"

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0

    @property
    def step_distance(self) -> float:
        """Distance advanced per tick (metric units)."""
        return self.speed_mps * self.tick_interval_s

    def check(self) -> None:
        """Raise :class:`InvalidConfigurationError` unless speed and interval are positive."""
        if self.tick_interval_ms <= 0:
            raise InvalidConfigurationError(
                f"tick_interval_ms must be positive, got {self.tick_interval_ms}"
            )
        if not self.speed_mps > 0.0:
            raise InvalidConfigurationError(f"speed_mps must be positive, got {self.speed_mps}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> SimulationConfig:
        """Build a config from ``ROUTE_SIM_*`` variables; keyword overrides win.

        Raises:
            InvalidConfigurationError: If a variable cannot be coerced to its field type.
        """
        env = os.environ if environ is None else environ
        values = {field: env[var] for var, field in _ENV_FIELDS.items() if env.get(var)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise InvalidConfigurationError(str(exc)) from exc
