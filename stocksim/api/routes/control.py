"""Control API routes for the trading agent simulation."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...logging_config import get_logger

logger = get_logger(__name__)

# Registered by main.py before the app starts; None when agents run elsewhere.
_sim_instance = None


class StatusResponse(BaseModel):
    """Response model for start/stop."""

    status: str


class AgentProgress(BaseModel):
    """One simulated agent as seen from its own side."""

    agent_id: str
    failed: bool
    messages_sent: int
    logical_time: int


class SimStatusResponse(BaseModel):
    """Response model for the simulation status."""

    running: bool
    agents: list[AgentProgress]


def set_sim_instance(sim) -> None:
    """Register the simulation driven by these routes."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance():
    return _sim_instance


def _require_sim():
    if _sim_instance is None:
        raise HTTPException(status_code=404, detail="SIM not configured")
    return _sim_instance


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Launch the agents against this coordinator."""
        sim = _require_sim()
        sim.set_metrics(app.metrics)
        try:
            await sim.start()
        except Exception as e:
            logger.error("SIM failed to start: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Cancel the agents; the sweep will mark them FAILED after the timeout."""
        sim = _require_sim()
        try:
            await sim.stop()
        except Exception as e:
            logger.error("SIM failed to stop: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    @router.get("/sim/status", response_model=SimStatusResponse)
    async def sim_status() -> dict:
        """Agent-side view: which agents gave up and how far their clocks got."""
        return _require_sim().status()

    return router
