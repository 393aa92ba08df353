"""Liveness module: last-seen tracking and the failure sweep."""

from .sweep import FailureSweep
from .tracker import ILivenessTracker, LivenessTracker, wall_clock_millis

__all__ = ["FailureSweep", "ILivenessTracker", "LivenessTracker", "wall_clock_millis"]
