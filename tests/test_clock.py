"""Tests for LogicalClock."""

import random
import threading

import pytest

from stocksim.clock import LogicalClock


class TestLocalEvents:
    """Tests for tick() and tick_for_send()."""

    def test_starts_at_zero(self, logical_clock):
        """Test default start value."""
        assert logical_clock.current() == 0

    def test_tick_increments(self, logical_clock):
        """Test that tick() advances by one."""
        logical_clock.tick()
        logical_clock.tick()
        assert logical_clock.current() == 2

    def test_tick_for_send_returns_new_value(self, logical_clock):
        """Test that tick_for_send() returns the incremented value."""
        logical_clock.tick()
        assert logical_clock.tick_for_send() == 2
        assert logical_clock.current() == 2

    def test_negative_start_rejected(self):
        """Test that a clock cannot start below zero."""
        with pytest.raises(ValueError):
            LogicalClock(start=-1)


class TestReceiveRule:
    """Tests for observe_received()."""

    def test_local_ahead(self):
        """Test l=5, r=3 -> 6."""
        clock = LogicalClock(start=5)
        assert clock.observe_received(3) == 6
        assert clock.current() == 6

    def test_remote_ahead(self):
        """Test l=3, r=7 -> 8."""
        clock = LogicalClock(start=3)
        clock.observe_received(7)
        assert clock.current() == 8

    def test_equal_values(self):
        """Test l=r advances past both."""
        clock = LogicalClock(start=4)
        assert clock.observe_received(4) == 5

    def test_monotonic_over_random_sequence(self):
        """Test every operation strictly increases the clock."""
        rng = random.Random(42)
        clock = LogicalClock()
        for _ in range(500):
            before = clock.current()
            op = rng.choice(["tick", "send", "receive"])
            if op == "tick":
                clock.tick()
            elif op == "send":
                clock.tick_for_send()
            else:
                remote = rng.randrange(0, 2 * before + 10)
                clock.observe_received(remote)
                assert clock.current() == max(before, remote) + 1
            assert clock.current() > before


class TestConcurrency:
    """Tests for thread safety."""

    def test_concurrent_ticks_are_not_lost(self):
        """Test that concurrent increments from threads all land."""
        clock = LogicalClock()

        def worker():
            for _ in range(1000):
                clock.tick_for_send()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert clock.current() == 8000
