"""In-memory counters and gauges for the coordinator and agents."""

import threading
from typing import Protocol

# Gauges
LAMPORT_CLOCK = "lamport_timestamp"  # label: node_id
NODE_STATUS = "node_status"  # label: node_id, 1=UP, 0=DOWN/FAILED

# Counters
TRADES_TOTAL = "trade_count_total"  # label: side
HEARTBEATS_TOTAL = "heartbeat_count_total"  # label: agent_id
MESSAGES_SENT_TOTAL = "message_sent_total"  # label: node_id
MESSAGES_RECEIVED_TOTAL = "message_received_total"  # label: node_id
DUPLICATE_ORDERS_TOTAL = "duplicate_order_total"  # label: node_id
FAILURES_DETECTED_TOTAL = "failure_detected_total"


class IMetrics(Protocol):
    """Observability collaborator injected into the coordinator and sweep."""

    def increment(self, name: str, label: str | None = None, amount: int = 1) -> None:
        """Increase a monotonic counter."""
        ...

    def set_gauge(self, name: str, label: str | None, value: float) -> None:
        """Set a gauge to an absolute value."""
        ...

    def counter(self, name: str, label: str | None = None) -> int:
        """Read a counter (0 if never incremented)."""
        ...

    def gauge(self, name: str, label: str | None = None) -> float | None:
        """Read a gauge (None if never set)."""
        ...

    def as_dict(self) -> dict:
        """Copy of all counters and gauges."""
        ...


class Metrics:
    """Thread-safe in-memory metrics registry."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: dict[tuple[str, str | None], int] = {}
        self._gauges: dict[tuple[str, str | None], float] = {}

    def increment(self, name: str, label: str | None = None, amount: int = 1) -> None:
        """Increase a monotonic counter."""
        if amount < 0:
            raise ValueError("Counters can only increase")
        with self._lock:
            key = (name, label)
            self._counters[key] = self._counters.get(key, 0) + amount

    def set_gauge(self, name: str, label: str | None, value: float) -> None:
        """Set a gauge to an absolute value."""
        with self._lock:
            self._gauges[(name, label)] = value

    def counter(self, name: str, label: str | None = None) -> int:
        with self._lock:
            return self._counters.get((name, label), 0)

    def gauge(self, name: str, label: str | None = None) -> float | None:
        with self._lock:
            return self._gauges.get((name, label))

    def as_dict(self) -> dict:
        """
        Copy of all metrics grouped by name.

        Returns:
            {"counters": {name: {label: value}}, "gauges": {name: {label: value}}}.
            Unlabelled series use the empty string as label.
        """
        with self._lock:
            counters = list(self._counters.items())
            gauges = list(self._gauges.items())

        result: dict[str, dict] = {"counters": {}, "gauges": {}}
        for section, items in (("counters", counters), ("gauges", gauges)):
            for (name, label), value in items:
                result[section].setdefault(name, {})[label or ""] = value
        return result
