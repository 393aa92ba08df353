"""Tracker implementation for creating TraceEvents."""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Protocol

from ..models import TraceEvent

DEFAULT_CAPACITY = 1000


class ITracker(Protocol):
    """Creating TraceEvents and reading them back."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create a TraceEvent and keep it."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events (newest first) with optional filters."""
        ...


class Tracker:
    """Keeps the most recent TraceEvents in memory."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._events: deque[TraceEvent] = deque(maxlen=capacity)

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create a TraceEvent and keep it."""
        self._events.append(
            TraceEvent(
                id=str(uuid.uuid4()),
                event_type=event_type,
                actor=actor,
                data=dict(data),
                timestamp=datetime.now(timezone.utc),
            )
        )

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events (newest first) with optional filters."""
        result = []
        for event in reversed(self._events):
            if after is not None and event.timestamp <= after:
                continue
            if event_types and event.event_type not in event_types:
                continue
            if actor is not None and event.actor != actor:
                continue
            result.append(event)
            if len(result) >= limit:
                break
        return result
