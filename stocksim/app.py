"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .clock import LogicalClock
from .config import Settings
from .coordinator import Coordinator
from .liveness import FailureSweep, LivenessTracker
from .logging_config import get_logger
from .metrics import IMetrics, Metrics, NODE_STATUS
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def coordinator(self) -> Coordinator:
        ...

    @property
    def metrics(self) -> IMetrics:
        ...

    @property
    def tracker(self) -> ITracker:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or Settings.from_env()

        # Components (will be initialized in start())
        self._metrics: Metrics | None = None
        self._tracker: Tracker | None = None
        self._clock: LogicalClock | None = None
        self._liveness: LivenessTracker | None = None
        self._coordinator: Coordinator | None = None
        self._sweep: FailureSweep | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        if self._coordinator is not None:
            return
        logger.info("Starting coordinator %s", self._settings.node_id)

        # 1. Observability collaborators (no dependencies)
        self._metrics = Metrics()
        self._tracker = Tracker()

        # 2. Clock and liveness state, owned by the coordinator
        self._clock = LogicalClock()
        self._liveness = LivenessTracker()

        # 3. Coordinator (depends on all of the above)
        self._coordinator = Coordinator(
            clock=self._clock,
            liveness=self._liveness,
            metrics=self._metrics,
            tracker=self._tracker,
            node_id=self._settings.node_id,
            agent_timeout_millis=self._settings.agent_timeout_millis,
            max_trades_in_snapshot=self._settings.max_trades_in_snapshot,
            dedup_window=self._settings.dedup_window,
        )
        self._metrics.set_gauge(NODE_STATUS, self._settings.node_id, 1)
        logger.info("Coordinator initialized")

        # 4. FailureSweep (depends on LivenessTracker, Metrics, Tracker)
        self._sweep = FailureSweep(
            liveness=self._liveness,
            metrics=self._metrics,
            tracker=self._tracker,
            timeout_millis=self._settings.agent_timeout_millis,
            period_millis=self._settings.sweep_period_millis,
        )
        await self._sweep.start()
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._sweep:
            await self._sweep.stop()
        if self._metrics:
            self._metrics.set_gauge(NODE_STATUS, self._settings.node_id, 0)
        logger.info("Coordinator %s stopped", self._settings.node_id)

    @property
    def coordinator(self) -> Coordinator:
        """Get coordinator instance."""
        if not self._coordinator:
            raise RuntimeError("Application not started")
        return self._coordinator

    @property
    def sweep(self) -> FailureSweep:
        """Get failure sweep instance."""
        if not self._sweep:
            raise RuntimeError("Application not started")
        return self._sweep

    @property
    def metrics(self) -> Metrics:
        """Get metrics instance."""
        if not self._metrics:
            raise RuntimeError("Application not started")
        return self._metrics

    @property
    def tracker(self) -> Tracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker
