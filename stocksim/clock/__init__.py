"""Logical clock module."""

from .clock import ILogicalClock, LogicalClock

__all__ = ["ILogicalClock", "LogicalClock"]
