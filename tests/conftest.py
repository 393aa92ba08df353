"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeWallClock:
    """Controllable millisecond clock for liveness tests."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture
def wall_clock():
    """Create fake wall clock."""
    return FakeWallClock()


@pytest.fixture
def metrics():
    """Create in-memory metrics."""
    from stocksim.metrics import Metrics

    return Metrics()


@pytest.fixture
def tracker():
    """Create in-memory tracker."""
    from stocksim.tracker import Tracker

    return Tracker()


@pytest.fixture
def logical_clock():
    """Create logical clock at 0."""
    from stocksim.clock import LogicalClock

    return LogicalClock()


@pytest.fixture
def liveness(wall_clock):
    """Create LivenessTracker driven by the fake wall clock."""
    from stocksim.liveness import LivenessTracker

    return LivenessTracker(now_millis=wall_clock)


@pytest.fixture
def coordinator(logical_clock, liveness, metrics, tracker, wall_clock):
    """Create Coordinator with default limits."""
    from stocksim.coordinator import Coordinator

    return Coordinator(
        clock=logical_clock,
        liveness=liveness,
        metrics=metrics,
        tracker=tracker,
        node_id="market-node-01",
        agent_timeout_millis=10_000,
        max_trades_in_snapshot=50,
        now_millis=wall_clock,
    )


@pytest.fixture
def sweep(liveness, metrics, tracker):
    """Create FailureSweep (not started)."""
    from stocksim.liveness import FailureSweep

    return FailureSweep(
        liveness=liveness,
        metrics=metrics,
        tracker=tracker,
        timeout_millis=10_000,
        period_millis=2_000,
    )


@pytest.fixture
def settings():
    """Settings with a fast sweep for tests."""
    from stocksim.config import Settings

    return Settings(sweep_period_millis=50, agent_timeout_millis=10_000)


@pytest_asyncio.fixture
async def application(settings):
    """Create and start an Application."""
    from stocksim.app import Application

    app = Application(settings)
    await app.start()
    yield app
    await app.stop()


def order_event(sender: str = "agent-1", ts: int = 1, event_id: str | None = None, **order_fields):
    """Build an ORDER event."""
    from stocksim.models import Event, EventKind, Order, Side

    fields = {
        "agent_id": sender,
        "stock_symbol": "AAPL",
        "quantity": 10,
        "price": 101.5,
        "side": Side.BUY,
    }
    fields.update(order_fields)
    return Event(
        kind=EventKind.ORDER,
        sender_id=sender,
        receiver_id="MarketNode",
        logical_timestamp=ts,
        order=Order(**fields),
        event_id=event_id,
    )


def heartbeat_event(sender: str = "agent-1", ts: int = 1):
    """Build a HEARTBEAT event."""
    from stocksim.models import Event, EventKind

    return Event(
        kind=EventKind.HEARTBEAT,
        sender_id=sender,
        receiver_id="MarketNode",
        logical_timestamp=ts,
    )
