"""Tests for LivenessTracker."""

from stocksim.models import AgentStatus


class TestRefresh:
    """Tests for refresh()."""

    def test_refresh_records_now(self, liveness, wall_clock):
        """Test that refresh stores the current wall-clock time."""
        liveness.refresh("agent-1")
        assert liveness.last_seen("agent-1") == wall_clock.now

    def test_refresh_is_idempotent(self, liveness, wall_clock):
        """Test that repeated refreshes keep one entry with the latest time."""
        liveness.refresh("agent-1")
        wall_clock.advance(500)
        liveness.refresh("agent-1")
        assert liveness.agents() == ["agent-1"]
        assert liveness.last_seen("agent-1") == wall_clock.now


class TestStatusOf:
    """Tests for status_of()."""

    def test_never_seen_is_unknown(self, liveness):
        """Test that an agent with no record is UNKNOWN, not FAILED."""
        assert liveness.status_of("ghost", 10_000) == AgentStatus.UNKNOWN

    def test_active_within_timeout(self, liveness, wall_clock):
        """Test that an agent exactly at the timeout is still ACTIVE."""
        liveness.refresh("agent-1")
        wall_clock.advance(10_000)
        assert liveness.status_of("agent-1", 10_000) == AgentStatus.ACTIVE

    def test_failed_after_timeout(self, liveness, wall_clock):
        """Test that an agent queried at T+timeout+1 is FAILED."""
        liveness.refresh("agent-1")
        wall_clock.advance(10_001)
        assert liveness.status_of("agent-1", 10_000) == AgentStatus.FAILED

    def test_refresh_revives(self, liveness, wall_clock):
        """Test that a late refresh makes a failed agent ACTIVE again."""
        liveness.refresh("agent-1")
        wall_clock.advance(20_000)
        liveness.refresh("agent-1")
        assert liveness.status_of("agent-1", 10_000) == AgentStatus.ACTIVE


class TestAllStatuses:
    """Tests for all_statuses()."""

    def test_empty(self, liveness):
        """Test that no agents gives an empty map."""
        assert liveness.all_statuses(10_000) == {}

    def test_mixed_statuses(self, liveness, wall_clock):
        """Test that agents are judged against the same instant."""
        liveness.refresh("old")
        wall_clock.advance(6_000)
        liveness.refresh("new")
        wall_clock.advance(5_000)

        statuses = liveness.all_statuses(10_000)
        assert statuses == {"old": AgentStatus.FAILED, "new": AgentStatus.ACTIVE}

    def test_returns_copy(self, liveness):
        """Test that mutating the result does not affect the tracker."""
        liveness.refresh("agent-1")
        statuses = liveness.all_statuses(10_000)
        statuses["agent-2"] = AgentStatus.ACTIVE
        assert liveness.agents() == ["agent-1"]
