"""Learner progression tracking."""

from .tracker import ProgressSummary, ProgressTracker, TrackerState

__all__ = [
    "ProgressSummary",
    "ProgressTracker",
    "TrackerState",
]
