"""Event submission and state API routes."""

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...config import COORDINATOR_NAME
from ...coordinator import InvalidEventError
from ...models import MAX_LOGICAL_TIMESTAMP, AgentStatus, Event, EventKind, Order, Side


class OrderPayload(BaseModel):
    """Order carried by an ORDER event."""

    agent_id: str
    stock_symbol: str
    quantity: int
    price: float
    side: Side


class EventRequest(BaseModel):
    """Request model for submitting an event."""

    kind: EventKind
    sender_id: str
    receiver_id: str = COORDINATOR_NAME
    logical_timestamp: int = Field(ge=0, le=MAX_LOGICAL_TIMESTAMP)
    order: OrderPayload | None = None
    event_id: str | None = None

    def to_event(self) -> Event:
        order = None
        if self.order is not None:
            order = Order(
                agent_id=self.order.agent_id,
                stock_symbol=self.order.stock_symbol,
                quantity=self.order.quantity,
                price=self.order.price,
                side=self.order.side,
            )
        return Event(
            kind=self.kind,
            sender_id=self.sender_id,
            receiver_id=self.receiver_id,
            logical_timestamp=self.logical_timestamp,
            order=order,
            event_id=self.event_id,
        )


class SubmitResponse(BaseModel):
    """Response model for an accepted event."""

    status: str
    logical_time: int
    trade_id: str | None = None


class TradeResponse(BaseModel):
    """Response model for a trade."""

    trade_id: str
    agent_id: str
    stock_symbol: str
    quantity: int
    price: float
    side: Side
    coordinator_logical_time: int
    wall_clock_millis: int


class StateResponse(BaseModel):
    """Response model for the system snapshot."""

    recent_trades: list[TradeResponse]
    agent_statuses: dict[str, AgentStatus]
    market_node_status: str
    logical_time: int
    total_trades: int


def create_events_router(app: IApplication) -> APIRouter:
    """Create events router."""
    router = APIRouter(prefix="/api", tags=["events"])

    @router.post("/events", response_model=SubmitResponse)
    async def submit_event(request: EventRequest) -> dict:
        """Submit an ORDER or HEARTBEAT event to the coordinator."""
        try:
            receipt = await app.coordinator.accept(request.to_event())
            return {
                "status": "ok",
                "logical_time": receipt.logical_time,
                "trade_id": receipt.trade.trade_id if receipt.trade else None,
            }
        except InvalidEventError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/state", response_model=StateResponse)
    async def get_state() -> dict:
        """Get recent trades and agent statuses."""
        snapshot = app.coordinator.snapshot()
        return {
            "recent_trades": [
                {
                    "trade_id": t.trade_id,
                    "agent_id": t.agent_id,
                    "stock_symbol": t.stock_symbol,
                    "quantity": t.quantity,
                    "price": t.price,
                    "side": t.side,
                    "coordinator_logical_time": t.coordinator_logical_time,
                    "wall_clock_millis": t.wall_clock_millis,
                }
                for t in snapshot.recent_trades
            ],
            "agent_statuses": snapshot.agent_statuses,
            "market_node_status": "UP" if snapshot.node_up else "DOWN",
            "logical_time": snapshot.logical_time,
            "total_trades": snapshot.total_trades,
        }

    return router
