"""Metrics module."""

from .metrics import (
    DUPLICATE_ORDERS_TOTAL,
    FAILURES_DETECTED_TOTAL,
    HEARTBEATS_TOTAL,
    LAMPORT_CLOCK,
    MESSAGES_RECEIVED_TOTAL,
    MESSAGES_SENT_TOTAL,
    NODE_STATUS,
    TRADES_TOTAL,
    IMetrics,
    Metrics,
)

__all__ = [
    "IMetrics",
    "Metrics",
    "LAMPORT_CLOCK",
    "NODE_STATUS",
    "TRADES_TOTAL",
    "HEARTBEATS_TOTAL",
    "MESSAGES_SENT_TOTAL",
    "MESSAGES_RECEIVED_TOTAL",
    "DUPLICATE_ORDERS_TOTAL",
    "FAILURES_DETECTED_TOTAL",
]
