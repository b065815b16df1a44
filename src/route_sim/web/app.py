"""FastAPI Web application — path projection and dry-run simulation."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from route_sim import __version__
from route_sim.web.schemas import (
    HealthResponse,
    ProjectRequest,
    ProjectResponse,
    SimulateRequest,
    SimulateResponse,
)
from route_sim.web.service import SimulationService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="Route Simulator", version=__version__)


def _service() -> SimulationService:
    return SimulationService()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post("/api/project", response_model=ProjectResponse)
def project(req: ProjectRequest) -> ProjectResponse:
    """Project a point onto a path and return the traveled sub-path."""
    try:
        return _service().project(req)
    except ValueError as exc:
        _logger.info("Rejected projection request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/api/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest) -> SimulateResponse:
    """Return every tick a simulation over ``req.path`` would emit."""
    try:
        return _service().simulate(req)
    except ValueError as exc:
        _logger.info("Rejected simulation request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
