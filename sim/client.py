"""HTTP client for the coordinator service."""

import httpx

from stocksim.logging_config import get_logger
from stocksim.models import Event

logger = get_logger(__name__)


class ConnectionLost(Exception):
    """The coordinator could not be reached or failed to answer."""


class EventRejected(ValueError):
    """The coordinator refused an event as malformed (4xx)."""


def event_to_payload(event: Event) -> dict:
    """Encode an Event as the JSON body of POST /api/events."""
    payload = {
        "kind": event.kind.value,
        "sender_id": event.sender_id,
        "receiver_id": event.receiver_id,
        "logical_timestamp": event.logical_timestamp,
        "event_id": event.event_id,
        "order": None,
    }
    if event.order is not None:
        payload["order"] = {
            "agent_id": event.order.agent_id,
            "stock_symbol": event.order.stock_symbol,
            "quantity": event.order.quantity,
            "price": event.order.price,
            "side": event.order.side.value,
        }
    return payload


class CoordinatorClient:
    """Thin wrapper over the coordinator's two service calls."""

    def __init__(self, client: httpx.AsyncClient, api_url: str, timeout: float = 10.0):
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    async def submit(self, event: Event) -> dict:
        """
        Deliver one event.

        Returns:
            The coordinator's response body.

        Raises:
            ConnectionLost: On transport errors or a 5xx answer.
            EventRejected: If the coordinator rejected the event (4xx).
        """
        try:
            response = await self._client.post(
                f"{self._api_url}/api/events",
                json=event_to_payload(event),
                timeout=self._timeout,
            )
        except httpx.TransportError as e:
            raise ConnectionLost(str(e)) from e

        if response.status_code >= 500:
            raise ConnectionLost(f"Coordinator error {response.status_code}")
        if response.status_code >= 400:
            raise EventRejected(f"Event rejected: {response.text}")
        return response.json()

    async def get_state(self) -> dict:
        """
        Poll the coordinator snapshot.

        An unreachable coordinator is reported as a state with
        market_node_status "DOWN" rather than an exception.
        """
        try:
            response = await self._client.get(
                f"{self._api_url}/api/state", timeout=self._timeout
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning("Coordinator unreachable: %s", e)
            return {
                "recent_trades": [],
                "agent_statuses": {},
                "market_node_status": "DOWN",
                "logical_time": None,
                "total_trades": 0,
            }
