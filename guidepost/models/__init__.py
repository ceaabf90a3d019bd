"""
Data models for Guidepost: projects and steps, observations, and the
guidance records produced by the orchestrator.
"""

from .project import Project, Step
from .observation import (
    DEFAULT_FRESHNESS_SECONDS,
    UNKNOWN_ACTIVITY,
    UNKNOWN_APPLICATION,
    DetectedElement,
    Observation,
    Position,
    TextFragment,
)
from .guidance import (
    GuidanceEvent,
    GuidanceKind,
    GuidanceNotice,
    GuidancePriority,
    GuidanceStatus,
    MatchResult,
    NoticeKind,
    OrchestratorState,
)

__all__ = [
    # project
    "Project",
    "Step",
    # observation
    "DEFAULT_FRESHNESS_SECONDS",
    "UNKNOWN_ACTIVITY",
    "UNKNOWN_APPLICATION",
    "DetectedElement",
    "Observation",
    "Position",
    "TextFragment",
    # guidance
    "GuidanceEvent",
    "GuidanceKind",
    "GuidanceNotice",
    "GuidancePriority",
    "GuidanceStatus",
    "MatchResult",
    "NoticeKind",
    "OrchestratorState",
]
