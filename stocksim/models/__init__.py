"""Core data models for stocksim."""

from .liveness import AgentStatus
from .snapshot import SystemSnapshot
from .tracing import TraceEvent
from .trading import MAX_LOGICAL_TIMESTAMP, STOCK_SYMBOLS, Event, EventKind, Order, Side, Trade

__all__ = [
    # Trading
    "MAX_LOGICAL_TIMESTAMP",
    "STOCK_SYMBOLS",
    "Side",
    "Order",
    "Trade",
    "EventKind",
    "Event",
    # Liveness
    "AgentStatus",
    # Snapshot
    "SystemSnapshot",
    # Tracing
    "TraceEvent",
]
