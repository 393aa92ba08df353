"""Main entry point for the stocksim coordinator."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from sim import Sim
from stocksim.api import create_fastapi_app
from stocksim.app import Application
from stocksim.config import Settings
from stocksim.logging_config import setup_logging


def main():
    """Run the coordinator HTTP service."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging()

    # Agents are started on demand via /api/control/sim/start
    sim = Sim(api_url=settings.api_url, agent_count=settings.sim_agent_count)

    from stocksim.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app(Application(settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
