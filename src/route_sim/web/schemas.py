"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Coordinate = tuple[float, float]

MAX_TICKS = 100_000


class HealthResponse(BaseModel):
    status: str
    version: str


class ProjectRequest(BaseModel):
    path: list[Coordinate]
    point: Coordinate
    metric: Literal["haversine", "planar"] = "haversine"


class ProjectionModel(BaseModel):
    segment_index: int
    point: Coordinate
    distance: float
    offset: float


class ProjectResponse(BaseModel):
    total_length: float
    projection: ProjectionModel
    traveled: list[Coordinate]


class SimulateRequest(BaseModel):
    path: list[Coordinate]
    speed_mps: float = 1.4
    tick_interval_ms: int = 1000
    metric: Literal["haversine", "planar"] = "haversine"
    geojson: bool = False
    max_ticks: int = Field(default=10_000, gt=0, le=MAX_TICKS)


class TickModel(BaseModel):
    tick: int
    elapsed_ms: int
    distance: float
    position: Coordinate
    projection: ProjectionModel
    final: bool
    feature_collection: dict | None = None


class SimulateResponse(BaseModel):
    total_length: float
    tick_count: int
    truncated: bool
    ticks: list[TickModel]
