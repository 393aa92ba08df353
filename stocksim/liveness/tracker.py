"""LivenessTracker: last-seen wall-clock time per agent."""

import time
from typing import Callable, Protocol

from ..models import AgentStatus


def wall_clock_millis() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


class ILivenessTracker(Protocol):
    """Records when agents were last heard from."""

    def refresh(self, agent_id: str) -> None:
        """Mark agent_id as seen now."""
        ...

    def status_of(self, agent_id: str, timeout_millis: int) -> AgentStatus:
        """Classify one agent against the timeout."""
        ...

    def all_statuses(self, timeout_millis: int) -> dict[str, AgentStatus]:
        """Classify every known agent against the same instant."""
        ...


class LivenessTracker:
    """In-memory last-seen map. Entries are never removed."""

    def __init__(self, now_millis: Callable[[], int] = wall_clock_millis):
        self._now = now_millis
        self._last_seen: dict[str, int] = {}

    def refresh(self, agent_id: str) -> None:
        """Mark agent_id as seen now."""
        self._last_seen[agent_id] = self._now()

    def last_seen(self, agent_id: str) -> int | None:
        return self._last_seen.get(agent_id)

    def agents(self) -> list[str]:
        return list(self._last_seen)

    def status_of(self, agent_id: str, timeout_millis: int) -> AgentStatus:
        """Classify one agent; UNKNOWN if it never contacted the coordinator."""
        last_seen = self._last_seen.get(agent_id)
        if last_seen is None:
            return AgentStatus.UNKNOWN
        return self._classify(self._now(), last_seen, timeout_millis)

    def all_statuses(self, timeout_millis: int) -> dict[str, AgentStatus]:
        """Classify every known agent against the same instant."""
        now = self._now()
        return {
            agent_id: self._classify(now, last_seen, timeout_millis)
            for agent_id, last_seen in list(self._last_seen.items())
        }

    @staticmethod
    def _classify(now: int, last_seen: int, timeout_millis: int) -> AgentStatus:
        if now - last_seen > timeout_millis:
            return AgentStatus.FAILED
        return AgentStatus.ACTIVE
