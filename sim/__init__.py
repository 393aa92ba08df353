"""Trading agent harness that drives the coordinator over HTTP."""

from .agent import TradingAgent
from .client import ConnectionLost, CoordinatorClient, EventRejected
from .sim import ISim, Sim

__all__ = ["ConnectionLost", "CoordinatorClient", "EventRejected", "ISim", "Sim", "TradingAgent"]
