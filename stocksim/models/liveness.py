"""Agent liveness models."""

from enum import Enum


class AgentStatus(str, Enum):
    """Liveness of an agent as seen by the coordinator."""

    ACTIVE = "ACTIVE"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"  # never heard from
