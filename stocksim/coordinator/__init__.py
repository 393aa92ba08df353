"""Coordinator module."""

from .coordinator import Coordinator, ICoordinator, InvalidEventError, Receipt
from .trade_log import TradeLog

__all__ = ["Coordinator", "ICoordinator", "InvalidEventError", "Receipt", "TradeLog"]
