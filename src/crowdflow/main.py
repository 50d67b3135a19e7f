"""
CrowdFlow Service
=================

FastAPI entry point for the crowd simulation and alerting engine.

The service owns one CrowdSimulator and one LiveUpdateRunner. The runner
ticks the simulator on a fixed cadence while live updates are enabled.

Endpoints:
    GET  /                           - Service information
    GET  /health                     - Liveness check
    GET  /snapshot                   - Current readings (optional ?category=)
    GET  /alerts                     - Active alerts (?include_resolved=true for all)
    POST /alerts/{alert_id}/resolve  - Resolve an alert (unknown ids are a no-op)
    GET  /history                    - Synthetic hourly history (?days=N)
    GET  /insights                   - Aggregate insights
    GET  /live                       - Live-update flag and runner counters
    POST /live                       - Enable or disable live updates
"""

import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from crowdflow.catalog import load_catalog
from crowdflow.config import settings
from crowdflow.engine import CrowdSimulator, HistoricalGenerator, LiveUpdateRunner
from crowdflow.models.location import Location, LocationCategory
from crowdflow.observability import InsightsComputer


logger = logging.getLogger(__name__)


# =============================================================================
# Global State
# =============================================================================

_locations: List[Location] = []
_simulator: Optional[CrowdSimulator] = None
_runner: Optional[LiveUpdateRunner] = None
_runner_task: Optional[asyncio.Task] = None
_history: Optional[HistoricalGenerator] = None
_insights = InsightsComputer()
_startup_time: float = 0.0


class LiveToggle(BaseModel):
    """Request body for POST /live."""

    enabled: bool


# =============================================================================
# Getters
# =============================================================================

def get_simulator() -> CrowdSimulator:
    if _simulator is None:
        raise HTTPException(status_code=503, detail="Simulator not initialized")
    return _simulator

def get_runner() -> LiveUpdateRunner:
    if _runner is None:
        raise HTTPException(status_code=503, detail="Runner not initialized")
    return _runner


# =============================================================================
# Lifespan Management
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    global _locations, _simulator, _runner, _runner_task, _history, _startup_time

    _startup_time = time.time()
    logger.info(f"Starting {settings.service.name} {settings.service.version}")

    # Catalog problems are fatal before any simulation starts
    _locations = load_catalog(settings.catalog.path)

    seed = settings.simulation.seed
    _simulator = CrowdSimulator(seed=seed)
    _simulator.initialize(_locations)

    # Separate stream so history requests do not shift the live sequence
    _history = HistoricalGenerator(seed=None if seed is None else seed + 1)

    _runner = LiveUpdateRunner(
        _simulator,
        interval_seconds=settings.simulation.tick_interval_seconds,
        enabled=settings.simulation.live_updates,
    )
    _runner_task = asyncio.create_task(_runner.run(), name="live_updates")

    logger.info("All components started")

    yield

    logger.info("Shutting down gracefully...")

    if _runner:
        _runner.stop()
    if _runner_task:
        _runner_task.cancel()
        try:
            await _runner_task
        except asyncio.CancelledError:
            pass

    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="CrowdFlow Safety Engine",
    description="Crowd occupancy simulation, prediction and alerting",
    version=settings.service.version,
    lifespan=lifespan,
)


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/")
async def root() -> JSONResponse:
    """Service information endpoint."""
    return JSONResponse({
        "service": "CrowdFlow Safety Engine",
        "version": settings.service.version,
        "name": settings.service.name,
        "status": "running",
        "locations": len(_locations),
    })


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness check - always 200 while the process is running."""
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
    })


@app.get("/snapshot")
async def snapshot(category: Optional[LocationCategory] = None) -> JSONResponse:
    """Current readings in catalog order."""
    simulator = get_simulator()
    readings = simulator.get_snapshot(category=category)

    return JSONResponse({
        "tick": simulator.tick_count,
        "readings": [r.model_dump(mode="json") for r in readings.values()],
    })


@app.get("/alerts")
async def alerts(include_resolved: bool = False) -> JSONResponse:
    """Active alerts, or the full alert history."""
    simulator = get_simulator()
    items = simulator.get_all_alerts() if include_resolved else simulator.get_active_alerts()

    return JSONResponse({
        "alerts": [a.model_dump(mode="json") for a in items],
    })


@app.post("/alerts/{alert_id}/resolve")
async def resolve_alert(alert_id: str) -> JSONResponse:
    """Resolve an alert. Unknown or resolved ids are acknowledged without change."""
    resolved = get_simulator().resolve_alert(alert_id)

    return JSONResponse({
        "alert_id": alert_id,
        "resolved": resolved,
    })


@app.get("/history")
async def history(
    days: int = Query(default=settings.simulation.history_days, ge=1, le=31),
) -> JSONResponse:
    """Synthetic hourly history for the catalog."""
    if _history is None:
        raise HTTPException(status_code=503, detail="History generator not initialized")

    readings = _history.generate(_locations, days)

    return JSONResponse({
        "days": days,
        "readings": [r.model_dump(mode="json") for r in readings],
    })


@app.get("/insights")
async def insights() -> JSONResponse:
    """Aggregate insights over the current snapshot."""
    simulator = get_simulator()
    result = _insights.compute(
        _locations,
        simulator.get_snapshot(),
        simulator.get_active_alerts(),
    )

    return JSONResponse(result.to_dict())


@app.get("/live")
async def live_status() -> JSONResponse:
    """Live-update flag and runner counters."""
    return JSONResponse(get_runner().metrics())


@app.post("/live")
async def set_live(toggle: LiveToggle) -> JSONResponse:
    """Enable or disable live updates. Ticks skipped while off are not replayed."""
    runner = get_runner()
    runner.enabled = toggle.enabled
    logger.info(f"Live updates {'enabled' if toggle.enabled else 'disabled'}")

    return JSONResponse(runner.metrics())


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", settings.server.port))

    uvicorn.run(
        "crowdflow.main:app",
        host=settings.server.host,
        port=port,
        reload=False,
    )
