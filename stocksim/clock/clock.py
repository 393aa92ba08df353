"""Lamport logical clock."""

import threading
from typing import Protocol


class ILogicalClock(Protocol):
    """Causal counter shared by every event a node handles."""

    def tick(self) -> None:
        """Advance the clock for a local event."""
        ...

    def tick_for_send(self) -> int:
        """Advance the clock and return the timestamp for an outgoing event."""
        ...

    def observe_received(self, remote: int) -> int:
        """Apply the receive rule: local = max(local, remote) + 1."""
        ...

    def current(self) -> int:
        """Current logical time."""
        ...


class LogicalClock:
    """Lamport clock, safe to share between threads and tasks."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("Logical clock cannot start below zero")
        self._time = start
        self._lock = threading.Lock()

    def tick(self) -> None:
        """Advance the clock for a local event."""
        with self._lock:
            self._time += 1

    def tick_for_send(self) -> int:
        """Advance the clock and return the timestamp for an outgoing event."""
        with self._lock:
            self._time += 1
            return self._time

    def observe_received(self, remote: int) -> int:
        """Apply the receive rule and return the new local time."""
        with self._lock:
            self._time = max(self._time, remote) + 1
            return self._time

    def current(self) -> int:
        """Current logical time."""
        with self._lock:
            return self._time

    def __repr__(self) -> str:
        return f"LogicalClock(time={self.current()})"
