"""Tests for FailureSweep."""

import asyncio

import pytest

from stocksim.liveness import FailureSweep
from stocksim.metrics import FAILURES_DETECTED_TOTAL, NODE_STATUS
from stocksim.models import AgentStatus


class TestSweepOnce:
    """Tests for a single sweep evaluation."""

    @pytest.mark.asyncio
    async def test_active_agent_not_reported(self, sweep, liveness, metrics):
        """Test that an active agent produces no notification."""
        liveness.refresh("agent-1")

        assert await sweep.sweep_once() == []
        assert metrics.counter(FAILURES_DETECTED_TOTAL) == 0
        assert sweep.statuses() == {"agent-1": AgentStatus.ACTIVE}

    @pytest.mark.asyncio
    async def test_failure_reported_once(self, sweep, liveness, wall_clock, metrics, tracker):
        """Test that a silent agent is reported once across many sweeps."""
        liveness.refresh("agent-1")
        await sweep.sweep_once()

        wall_clock.advance(10_001)
        assert await sweep.sweep_once() == ["agent-1"]

        for _ in range(5):
            wall_clock.advance(2_000)
            assert await sweep.sweep_once() == []

        assert metrics.counter(FAILURES_DETECTED_TOTAL) == 1
        assert metrics.gauge(NODE_STATUS, "agent-1") == 0
        events = await tracker.get_trace_events(event_types=["agent_failed"])
        assert len(events) == 1
        assert events[0].data["agent_id"] == "agent-1"

    @pytest.mark.asyncio
    async def test_first_observation_failed_is_reported(self, sweep, liveness, wall_clock, metrics):
        """Test that an agent already FAILED on its first sweep is reported."""
        liveness.refresh("agent-1")
        wall_clock.advance(15_000)

        assert await sweep.sweep_once() == ["agent-1"]
        assert metrics.counter(FAILURES_DETECTED_TOTAL) == 1

    @pytest.mark.asyncio
    async def test_heartbeat_restores_and_rearms(self, sweep, liveness, wall_clock, metrics, tracker):
        """Test FAILED -> ACTIVE on the next sweep, and a second failure is reported."""
        liveness.refresh("agent-1")
        wall_clock.advance(10_001)
        await sweep.sweep_once()

        liveness.refresh("agent-1")
        assert await sweep.sweep_once() == []
        assert sweep.statuses()["agent-1"] == AgentStatus.ACTIVE
        assert metrics.gauge(NODE_STATUS, "agent-1") == 1
        assert len(await tracker.get_trace_events(event_types=["agent_recovered"])) == 1

        wall_clock.advance(10_001)
        assert await sweep.sweep_once() == ["agent-1"]
        assert metrics.counter(FAILURES_DETECTED_TOTAL) == 2


class TestSweepTask:
    """Tests for the background task lifecycle."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, liveness, metrics, tracker):
        """Test that the task runs periodically and stops promptly."""
        liveness.refresh("agent-1")
        sweep = FailureSweep(liveness, metrics, tracker, timeout_millis=10_000, period_millis=10)

        await sweep.start()
        assert sweep.running
        await asyncio.sleep(0.05)
        assert sweep.statuses() == {"agent-1": AgentStatus.ACTIVE}

        await sweep.stop()
        assert not sweep.running

    @pytest.mark.asyncio
    async def test_stop_interrupts_long_period(self, liveness, metrics, tracker):
        """Test that stop does not wait for the sleep to elapse."""
        sweep = FailureSweep(liveness, metrics, tracker, timeout_millis=10_000, period_millis=60_000)
        await sweep.start()

        await asyncio.wait_for(sweep.stop(), timeout=1.0)
        assert not sweep.running

    @pytest.mark.asyncio
    async def test_error_stops_only_the_sweep(self, metrics, tracker):
        """Test that an exception ends the sweep task and is recorded."""

        class BrokenLiveness:
            def all_statuses(self, timeout_millis):
                raise RuntimeError("boom")

        sweep = FailureSweep(BrokenLiveness(), metrics, tracker, timeout_millis=10, period_millis=5)
        await sweep.start()
        await asyncio.sleep(0.05)

        assert sweep.failed
        assert not sweep.running
        await sweep.stop()
