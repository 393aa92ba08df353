"""stocksim: Lamport-ordered trade coordinator with failure detection."""

from .app import Application, IApplication
from .clock import ILogicalClock, LogicalClock
from .config import Settings
from .coordinator import Coordinator, ICoordinator, InvalidEventError, TradeLog
from .liveness import FailureSweep, ILivenessTracker, LivenessTracker
from .metrics import IMetrics, Metrics
from .models import (
    STOCK_SYMBOLS,
    AgentStatus,
    Event,
    EventKind,
    Order,
    Side,
    SystemSnapshot,
    Trade,
    TraceEvent,
)
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "STOCK_SYMBOLS",
    "Side",
    "Order",
    "Trade",
    "EventKind",
    "Event",
    "AgentStatus",
    "SystemSnapshot",
    "TraceEvent",
    # Components
    "ILogicalClock",
    "LogicalClock",
    "ILivenessTracker",
    "LivenessTracker",
    "FailureSweep",
    "ICoordinator",
    "Coordinator",
    "InvalidEventError",
    "TradeLog",
    "IMetrics",
    "Metrics",
    "ITracker",
    "Tracker",
]
