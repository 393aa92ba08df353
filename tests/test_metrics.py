"""Tests for Metrics."""

import pytest

from stocksim.metrics import FAILURES_DETECTED_TOTAL, LAMPORT_CLOCK, TRADES_TOTAL


class TestCounters:
    """Tests for counters."""

    def test_unset_counter_is_zero(self, metrics):
        """Test default counter value."""
        assert metrics.counter(TRADES_TOTAL, "BUY") == 0

    def test_increment_by_label(self, metrics):
        """Test that labels are counted separately."""
        metrics.increment(TRADES_TOTAL, "BUY")
        metrics.increment(TRADES_TOTAL, "BUY")
        metrics.increment(TRADES_TOTAL, "SELL", amount=3)

        assert metrics.counter(TRADES_TOTAL, "BUY") == 2
        assert metrics.counter(TRADES_TOTAL, "SELL") == 3

    def test_counters_cannot_decrease(self, metrics):
        """Test that negative increments are rejected."""
        with pytest.raises(ValueError):
            metrics.increment(FAILURES_DETECTED_TOTAL, amount=-1)


class TestGauges:
    """Tests for gauges and export."""

    def test_gauge_overwrites(self, metrics):
        """Test that a gauge keeps the last value."""
        assert metrics.gauge(LAMPORT_CLOCK, "n1") is None
        metrics.set_gauge(LAMPORT_CLOCK, "n1", 3)
        metrics.set_gauge(LAMPORT_CLOCK, "n1", 7)
        assert metrics.gauge(LAMPORT_CLOCK, "n1") == 7

    def test_as_dict(self, metrics):
        """Test grouping by name and label."""
        metrics.increment(FAILURES_DETECTED_TOTAL)
        metrics.set_gauge(LAMPORT_CLOCK, "n1", 4)

        exported = metrics.as_dict()
        assert exported == {
            "counters": {FAILURES_DETECTED_TOTAL: {"": 1}},
            "gauges": {LAMPORT_CLOCK: {"n1": 4}},
        }
