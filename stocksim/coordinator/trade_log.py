"""Append-only trade log."""

from ..models import Trade


class TradeLog:
    """Trades in acceptance order. Nothing is ever removed or replaced."""

    def __init__(self):
        self._trades: list[Trade] = []

    def append(self, trade: Trade) -> None:
        self._trades.append(trade)

    def recent(self, limit: int) -> tuple[Trade, ...]:
        """The last `limit` trades, oldest first."""
        if limit <= 0:
            return ()
        return tuple(self._trades[-limit:])

    def all(self) -> tuple[Trade, ...]:
        return tuple(self._trades)

    def __len__(self) -> int:
        return len(self._trades)
