"""Coordinator: the single serialization point for agent events."""

import asyncio
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Protocol

from ..clock import ILogicalClock
from ..config import DEFAULT_NODE_ID
from ..liveness import ILivenessTracker, wall_clock_millis
from ..logging_config import get_logger
from ..metrics import (
    DUPLICATE_ORDERS_TOTAL,
    LAMPORT_CLOCK,
    MESSAGES_RECEIVED_TOTAL,
    NODE_STATUS,
    TRADES_TOTAL,
    IMetrics,
)
from ..models import MAX_LOGICAL_TIMESTAMP, STOCK_SYMBOLS, Event, EventKind, SystemSnapshot, Trade
from ..tracker import ITracker
from .trade_log import TradeLog

logger = get_logger(__name__)


class InvalidEventError(ValueError):
    """An inbound event violates the event structure."""


@dataclass(frozen=True)
class Receipt:
    """Outcome of one accepted event."""

    logical_time: int  # coordinator clock right after the receive
    trade: Trade | None = None
    duplicate: bool = False


class ICoordinator(Protocol):
    """Service interface exposed to transports."""

    async def accept(self, event: Event) -> Receipt:
        """Accept one event and report the receive time."""
        ...

    async def submit(self, event: Event) -> Trade | None:
        """Accept one event from an agent."""
        ...

    def snapshot(self) -> SystemSnapshot:
        """Read-only copy of current state."""
        ...


def validate_event(event: Event) -> None:
    """Raise InvalidEventError if the event is structurally malformed."""
    if not event.sender_id:
        raise InvalidEventError("Event has no sender_id")
    if event.logical_timestamp < 0:
        raise InvalidEventError(
            f"Negative logical timestamp {event.logical_timestamp} from {event.sender_id}"
        )
    if event.logical_timestamp >= MAX_LOGICAL_TIMESTAMP:
        # the receive rule adds one, which must still fit in 64 bits
        raise InvalidEventError(
            f"Logical timestamp {event.logical_timestamp} from {event.sender_id} would overflow"
        )

    if event.kind == EventKind.ORDER:
        order = event.order
        if order is None:
            raise InvalidEventError(f"ORDER event from {event.sender_id} has no order")
        if order.stock_symbol not in STOCK_SYMBOLS:
            raise InvalidEventError(f"Unknown stock symbol {order.stock_symbol!r}")
        if order.quantity <= 0:
            raise InvalidEventError(f"Order quantity must be positive, got {order.quantity}")
        if order.price <= 0:
            raise InvalidEventError(f"Order price must be positive, got {order.price}")
    elif event.kind == EventKind.HEARTBEAT:
        if event.order is not None:
            raise InvalidEventError(f"HEARTBEAT event from {event.sender_id} carries an order")
    else:
        raise InvalidEventError(f"Unknown event kind {event.kind!r}")


class Coordinator:
    """Merges agent events into one causally ordered trade log.

    Every `submit` runs under one lock, so the clock update and trade append
    of one event never interleave with another event's and the trade log
    order equals acceptance order.
    """

    def __init__(
        self,
        clock: ILogicalClock,
        liveness: ILivenessTracker,
        metrics: IMetrics,
        tracker: ITracker,
        node_id: str = DEFAULT_NODE_ID,
        agent_timeout_millis: int = 10_000,
        max_trades_in_snapshot: int = 50,
        dedup_window: int = 10_000,
        now_millis: Callable[[], int] = wall_clock_millis,
    ):
        self._clock = clock
        self._liveness = liveness
        self._metrics = metrics
        self._tracker = tracker
        self._node_id = node_id
        self._agent_timeout_millis = agent_timeout_millis
        self._max_trades = max_trades_in_snapshot
        self._dedup_window = dedup_window
        self._now = now_millis

        self._trade_log = TradeLog()
        self._seen_orders: OrderedDict[str, Trade] = OrderedDict()
        self._lock = asyncio.Lock()

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def logical_time(self) -> int:
        return self._clock.current()

    @property
    def trade_count(self) -> int:
        return len(self._trade_log)

    def trades(self) -> tuple[Trade, ...]:
        """Copy of the whole trade log in acceptance order."""
        return self._trade_log.all()

    async def submit(self, event: Event) -> Trade | None:
        """Accept one event; the recorded Trade for an ORDER, else None."""
        receipt = await self.accept(event)
        return receipt.trade

    async def accept(self, event: Event) -> Receipt:
        """
        Accept one event from an agent.

        Args:
            event: ORDER or HEARTBEAT event stamped with the sender's clock.

        Returns:
            Receipt with the clock value this event was received at and,
            for an ORDER, the recorded Trade (the original one if the
            event_id was already accepted).

        Raises:
            InvalidEventError: If the event is malformed. The clock is not
                advanced in that case.
        """
        validate_event(event)

        duplicate = False
        trade = None
        async with self._lock:
            before = self._clock.current()
            logical_time = self._clock.observe_received(event.logical_timestamp)
            self._liveness.refresh(event.sender_id)

            if event.kind == EventKind.ORDER:
                trade = self._seen_orders.get(event.event_id) if event.event_id else None
                if trade is not None:
                    duplicate = True
                else:
                    trade = self._record_trade(event, logical_time)

        self._after_submit(event, before, logical_time, trade, duplicate)
        if trade is not None and not duplicate:
            await self._tracker.track(
                "trade_recorded",
                "coordinator",
                {
                    "trade_id": trade.trade_id,
                    "agent_id": trade.agent_id,
                    "side": trade.side.value,
                    "logical_time": trade.coordinator_logical_time,
                    "sender_logical_time": event.logical_timestamp,
                },
            )
        return Receipt(logical_time=logical_time, trade=trade, duplicate=duplicate)

    def _record_trade(self, event: Event, logical_time: int) -> Trade:
        """Turn an accepted order into a trade. Caller holds the lock."""
        order = event.order
        # No order book: every accepted order executes immediately.
        trade = Trade(
            trade_id=str(uuid.uuid4()),
            agent_id=order.agent_id,
            stock_symbol=order.stock_symbol,
            quantity=order.quantity,
            price=order.price,
            side=order.side,
            coordinator_logical_time=logical_time,
            wall_clock_millis=self._now(),
        )
        self._trade_log.append(trade)

        if event.event_id:
            self._seen_orders[event.event_id] = trade
            if len(self._seen_orders) > self._dedup_window:
                self._seen_orders.popitem(last=False)
        return trade

    def _after_submit(
        self,
        event: Event,
        before: int,
        logical_time: int,
        trade: Trade | None,
        duplicate: bool,
    ) -> None:
        """Metrics and logging, outside the critical section."""
        self._metrics.increment(MESSAGES_RECEIVED_TOTAL, self._node_id)
        self._metrics.set_gauge(LAMPORT_CLOCK, self._node_id, logical_time)
        # Any message from an agent proves it is up again.
        self._metrics.set_gauge(NODE_STATUS, event.sender_id, 1)

        logger.debug(
            "Clock %s -> %s on %s from %s (LT=%s)",
            before,
            logical_time,
            event.kind.value,
            event.sender_id,
            event.logical_timestamp,
        )

        if event.kind == EventKind.HEARTBEAT:
            logger.info(
                "[LT=%s] Heartbeat from %s (msg LT=%s)",
                logical_time,
                event.sender_id,
                event.logical_timestamp,
            )
        elif duplicate:
            self._metrics.increment(DUPLICATE_ORDERS_TOTAL, self._node_id)
            logger.warning(
                "[LT=%s] Duplicate order %s from %s ignored",
                logical_time,
                event.event_id,
                event.sender_id,
            )
        elif trade is not None:
            self._metrics.increment(TRADES_TOTAL, trade.side.value)
            logger.info(
                "[LT=%s] Recorded %s %s %s @ %.2f from %s (msg LT=%s)",
                logical_time,
                trade.side.value,
                trade.quantity,
                trade.stock_symbol,
                trade.price,
                trade.agent_id,
                event.logical_timestamp,
            )

    def snapshot(self) -> SystemSnapshot:
        """Read-only copy of the recent trades and agent statuses."""
        return SystemSnapshot(
            recent_trades=self._trade_log.recent(self._max_trades),
            agent_statuses=self._liveness.all_statuses(self._agent_timeout_millis),
            node_up=True,
            logical_time=self._clock.current(),
            total_trades=len(self._trade_log),
        )
