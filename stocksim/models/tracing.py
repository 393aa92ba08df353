"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event (trade recorded, agent failed, ...)."""

    id: str
    event_type: str  # e.g. "trade_recorded", "agent_failed"
    actor: str  # who created this event
    data: dict  # full self-contained data for display
    timestamp: datetime
