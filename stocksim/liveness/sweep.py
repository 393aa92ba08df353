"""FailureSweep: periodic detection of silent agents."""

import asyncio

from ..logging_config import get_logger
from ..metrics import FAILURES_DETECTED_TOTAL, NODE_STATUS, IMetrics
from ..models import AgentStatus
from ..tracker import ITracker
from .tracker import ILivenessTracker

logger = get_logger(__name__)


class FailureSweep:
    """Polls the liveness tracker and reports ACTIVE -> FAILED edges once.

    The previous status of every agent is cached here, not in the tracker,
    so a dead agent raises one alarm rather than one per period. A later
    heartbeat flips the agent back to ACTIVE and re-arms the alarm.
    """

    def __init__(
        self,
        liveness: ILivenessTracker,
        metrics: IMetrics,
        tracker: ITracker,
        timeout_millis: int,
        period_millis: int,
    ):
        self._liveness = liveness
        self._metrics = metrics
        self._tracker = tracker
        self._timeout_millis = timeout_millis
        self._period = period_millis / 1000
        self._previous: dict[str, AgentStatus] = {}
        self._task: asyncio.Task | None = None
        self._error: BaseException | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def failed(self) -> bool:
        """True if the sweep loop died on an unexpected error."""
        return self._error is not None

    def statuses(self) -> dict[str, AgentStatus]:
        """Copy of the statuses seen by the last sweep."""
        return dict(self._previous)

    async def start(self) -> None:
        """Start the background sweep task."""
        if self.running:
            return
        self._error = None
        self._task = asyncio.create_task(self._run(), name="failure-sweep")
        logger.info("Failure sweep started (period=%ss)", self._period)

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if not self._task:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Failure sweep stopped")

    async def sweep_once(self) -> list[str]:
        """Evaluate all agents once. Returns agents that just failed."""
        current = self._liveness.all_statuses(self._timeout_millis)
        newly_failed = []

        for agent_id, status in current.items():
            previous = self._previous.get(agent_id, AgentStatus.ACTIVE)

            if status == AgentStatus.FAILED and previous == AgentStatus.ACTIVE:
                newly_failed.append(agent_id)
                logger.warning(
                    "Agent %s has failed (no message within %sms)",
                    agent_id,
                    self._timeout_millis,
                )
                self._metrics.increment(FAILURES_DETECTED_TOTAL)
                self._metrics.set_gauge(NODE_STATUS, agent_id, 0)
                await self._tracker.track(
                    "agent_failed",
                    "failure_sweep",
                    {"agent_id": agent_id, "timeout_millis": self._timeout_millis},
                )
            elif status == AgentStatus.ACTIVE and previous == AgentStatus.FAILED:
                logger.info("Agent %s is active again", agent_id)
                self._metrics.set_gauge(NODE_STATUS, agent_id, 1)
                await self._tracker.track(
                    "agent_recovered", "failure_sweep", {"agent_id": agent_id}
                )

        self._previous = current
        return newly_failed

    async def _run(self) -> None:
        """Sweep every period until cancelled."""
        while True:
            try:
                await asyncio.sleep(self._period)
                await self.sweep_once()
            except asyncio.CancelledError:
                break
            except Exception as e:
                # Only the sweep stops; request handling is unaffected.
                self._error = e
                logger.error("Failure sweep crashed: %s", e, exc_info=True)
                break
