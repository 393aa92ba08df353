"""Read-only system snapshot."""

from dataclasses import dataclass

from .liveness import AgentStatus
from .trading import Trade


@dataclass(frozen=True)
class SystemSnapshot:
    """Point-in-time copy of coordinator state for external readers."""

    recent_trades: tuple[Trade, ...]
    agent_statuses: dict[str, AgentStatus]
    node_up: bool = True
    logical_time: int = 0
    total_trades: int = 0
