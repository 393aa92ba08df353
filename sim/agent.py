"""TradingAgent: a simulated trader sending orders and heartbeats."""

import asyncio
import random
import uuid

from stocksim.clock import LogicalClock
from stocksim.config import COORDINATOR_NAME
from stocksim.logging_config import get_logger
from stocksim.metrics import (
    HEARTBEATS_TOTAL,
    LAMPORT_CLOCK,
    MESSAGES_SENT_TOTAL,
    NODE_STATUS,
    IMetrics,
)
from stocksim.models import STOCK_SYMBOLS, Event, EventKind, Order, Side

from .client import ConnectionLost, CoordinatorClient, EventRejected

logger = get_logger(__name__)

ORDER_PROBABILITY = 0.7


class TradingAgent:
    """Sends random ORDER (70%) and HEARTBEAT (30%) events until stopped.

    An agent created with simulate_failure goes silent after a handful of
    messages, which the coordinator's failure sweep should detect. Losing
    the connection to the coordinator is fatal to the agent.
    """

    def __init__(
        self,
        agent_id: str,
        client: CoordinatorClient,
        metrics: IMetrics,
        simulate_failure: bool = False,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
        rng: random.Random | None = None,
    ):
        self._agent_id = agent_id
        self._client = client
        self._metrics = metrics
        self._simulate_failure = simulate_failure
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._rng = rng or random.Random()
        self._clock = LogicalClock()
        self._message_count = 0
        self._failed = False

        self._metrics.set_gauge(NODE_STATUS, self._agent_id, 1)
        self._clock.tick()
        self._metrics.set_gauge(LAMPORT_CLOCK, self._agent_id, self._clock.current())

    @property
    def agent_id(self) -> str:
        return self._agent_id

    @property
    def clock(self) -> LogicalClock:
        return self._clock

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def message_count(self) -> int:
        return self._message_count

    async def run(self) -> None:
        """Main loop; returns when the agent fails or simulates failure."""
        fail_after = 5 + self._rng.randrange(5)
        try:
            while True:
                await asyncio.sleep(self._rng.uniform(self._min_delay, self._max_delay))

                if self._simulate_failure and self._message_count > fail_after:
                    logger.warning("Agent %s is simulating failure, going silent", self._agent_id)
                    self._mark_failed()
                    return

                await self.step()
        except ConnectionLost as e:
            logger.error("Agent %s lost connection to coordinator: %s", self._agent_id, e)
            self._mark_failed()
        except EventRejected as e:
            logger.error("Agent %s stopped, coordinator rejected its event: %s", self._agent_id, e)
            self._mark_failed()

    async def step(self) -> None:
        """Send one randomly chosen event."""
        if self._rng.random() < ORDER_PROBABILITY:
            await self.send_order(self._random_order())
        else:
            await self.send_heartbeat()

    async def send_order(self, order: Order) -> dict:
        event = self._stamp(EventKind.ORDER, order)
        response = await self._client.submit(event)
        self._after_send(response)
        logger.info(
            "[LT=%s] Agent %s sent %s %s %s @ %.2f",
            event.logical_timestamp,
            self._agent_id,
            order.side.value,
            order.quantity,
            order.stock_symbol,
            order.price,
        )
        return response

    async def send_heartbeat(self) -> dict:
        event = self._stamp(EventKind.HEARTBEAT, None)
        response = await self._client.submit(event)
        self._after_send(response)
        self._metrics.increment(HEARTBEATS_TOTAL, self._agent_id)
        logger.info("[LT=%s] Agent %s sent heartbeat", event.logical_timestamp, self._agent_id)
        return response

    def _stamp(self, kind: EventKind, order: Order | None) -> Event:
        """Tick the clock for a send event and build the outgoing event."""
        timestamp = self._clock.tick_for_send()
        self._metrics.set_gauge(LAMPORT_CLOCK, self._agent_id, timestamp)
        return Event(
            kind=kind,
            sender_id=self._agent_id,
            receiver_id=COORDINATOR_NAME,
            logical_timestamp=timestamp,
            order=order,
            event_id=str(uuid.uuid4()),
        )

    def _after_send(self, response: dict) -> None:
        self._message_count += 1
        self._metrics.increment(MESSAGES_SENT_TOTAL, self._agent_id)
        # The reply is a message too.
        remote = response.get("logical_time")
        if isinstance(remote, int):
            self._clock.observe_received(remote)
            self._metrics.set_gauge(LAMPORT_CLOCK, self._agent_id, self._clock.current())

    def _random_order(self) -> Order:
        return Order(
            agent_id=self._agent_id,
            stock_symbol=self._rng.choice(STOCK_SYMBOLS),
            quantity=1 + self._rng.randrange(100),
            price=round(10.0 + 190.0 * self._rng.random(), 2),
            side=self._rng.choice([Side.BUY, Side.SELL]),
        )

    def _mark_failed(self) -> None:
        self._failed = True
        self._metrics.set_gauge(NODE_STATUS, self._agent_id, 0)
