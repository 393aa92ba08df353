"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_NODE_ID = "market-node-01"
COORDINATOR_NAME = "MarketNode"


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    """Read a positive integer option, falling back to default when unset."""
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Recognized configuration options."""

    agent_timeout_millis: int = 10_000
    sweep_period_millis: int = 2_000
    max_trades_in_snapshot: int = 50
    dedup_window: int = 10_000
    node_id: str = DEFAULT_NODE_ID
    api_host: str = "localhost"
    api_port: int = 8000
    sim_agent_count: int = 3

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables."""
        if env is None:
            env = os.environ

        return cls(
            agent_timeout_millis=_positive_int(env, "AGENT_TIMEOUT_MILLIS", 10_000),
            sweep_period_millis=_positive_int(env, "SWEEP_PERIOD_MILLIS", 2_000),
            max_trades_in_snapshot=_positive_int(env, "MAX_TRADES_IN_SNAPSHOT", 50),
            dedup_window=_positive_int(env, "DEDUP_WINDOW", 10_000),
            node_id=env.get("NODE_ID") or DEFAULT_NODE_ID,
            api_host=env.get("API_HOST") or "localhost",
            api_port=_positive_int(env, "API_PORT", 8000),
            sim_agent_count=_positive_int(env, "SIM_AGENT_COUNT", 3),
        )

    @property
    def api_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"
