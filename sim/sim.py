"""SIM implementation - a fleet of trading agents."""

import asyncio
from typing import Protocol

import httpx

from stocksim.logging_config import get_logger
from stocksim.metrics import IMetrics, Metrics
from stocksim.tracker import ITracker

from .agent import TradingAgent
from .client import CoordinatorClient

logger = get_logger(__name__)


class ISim(Protocol):
    """Drive the coordinator with simulated agents."""

    async def start(self) -> None:
        """Start all agents."""
        ...

    async def stop(self) -> None:
        """Stop all agents."""
        ...

    def set_tracker(self, tracker: ITracker) -> None:
        ...

    def set_metrics(self, metrics: IMetrics) -> None:
        ...

    def status(self) -> dict:
        """Running flag and per-agent progress."""
        ...


class Sim:
    """Runs N trading agents; the first one simulates a failure."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        agent_count: int = 3,
        tracker: ITracker | None = None,
        metrics: IMetrics | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
    ):
        self._api_url = api_url
        self._agent_count = agent_count
        self._tracker = tracker
        self._metrics = metrics or Metrics()
        self._transport = transport
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._running = False
        self._agents: list[TradingAgent] = []
        self._tasks: list[asyncio.Task] = []
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    def set_metrics(self, metrics: IMetrics) -> None:
        """Inject the registry agents report into. Takes effect on next start."""
        self._metrics = metrics

    @property
    def agents(self) -> list[TradingAgent]:
        return list(self._agents)

    @property
    def running(self) -> bool:
        return self._running

    def status(self) -> dict:
        """Running flag and per-agent progress."""
        return {
            "running": self._running,
            "agents": [
                {
                    "agent_id": agent.agent_id,
                    "failed": agent.failed,
                    "messages_sent": agent.message_count,
                    "logical_time": agent.clock.current(),
                }
                for agent in self._agents
            ],
        }

    async def start(self) -> None:
        """Start all agents as background tasks."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(transport=self._transport)
        coordinator = CoordinatorClient(self._client, self._api_url)

        self._agents = [
            TradingAgent(
                agent_id=f"agent-{i + 1}",
                client=coordinator,
                metrics=self._metrics,
                simulate_failure=(i == 0),
                min_delay=self._min_delay,
                max_delay=self._max_delay,
            )
            for i in range(self._agent_count)
        ]
        self._tasks = [
            asyncio.create_task(agent.run(), name=agent.agent_id) for agent in self._agents
        ]
        logger.info("SIM started %s agents (%s will fail)", len(self._agents), "agent-1")

        if self._tracker:
            await self._tracker.track(
                "sim_started",
                "sim",
                {"agent_count": self._agent_count, "failing_agent": "agent-1"},
            )

    async def stop(self) -> None:
        """Cancel agent tasks and close the HTTP client."""
        if not self._running:
            return
        self._running = False

        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

        if self._client:
            await self._client.aclose()
            self._client = None

        if self._tracker:
            await self._tracker.track(
                "sim_stopped",
                "sim",
                {
                    "agent_count": self._agent_count,
                    "messages_sent": sum(a.message_count for a in self._agents),
                },
            )
        logger.info("SIM stopped")
