"""Order, trade and inbound event models."""

from dataclasses import dataclass
from enum import Enum

STOCK_SYMBOLS = ("AAPL", "GOOG", "TSLA")
MAX_LOGICAL_TIMESTAMP = 2**63 - 1


class Side(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"


class EventKind(str, Enum):
    """Kinds of events an agent can send to the coordinator."""

    ORDER = "ORDER"
    HEARTBEAT = "HEARTBEAT"


@dataclass(frozen=True)
class Order:
    """An order placed by an agent."""

    agent_id: str
    stock_symbol: str
    quantity: int
    price: float
    side: Side


@dataclass(frozen=True)
class Trade:
    """An accepted order, stamped with the coordinator's logical time."""

    trade_id: str
    agent_id: str
    stock_symbol: str
    quantity: int
    price: float
    side: Side
    coordinator_logical_time: int
    wall_clock_millis: int


@dataclass(frozen=True)
class Event:
    """A message from an agent to the coordinator.

    `logical_timestamp` is set by the sender from its own clock before
    transmission. `event_id` is an optional dedup key for ORDER events.
    """

    kind: EventKind
    sender_id: str
    receiver_id: str
    logical_timestamp: int
    order: Order | None = None
    event_id: str | None = None
