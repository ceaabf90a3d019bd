"""
Guidance models.

Pure data structures exchanged between the criteria matcher, the guidance
orchestrator and the host. They perform no I/O.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# --------------------------------------------------------------------------- #
# Matching
# --------------------------------------------------------------------------- #


@dataclass
class MatchResult:
    """
    Comparison between a Step's expectations and an Observation.

    `element_matches` holds one boolean per expected element, in the same
    order as `Step.expected_elements`. `matched` is the conjunction of all
    element matches and `criteria_match`. `confidence` is in [0.0, 1.0].
    """

    step_number: int
    element_matches: List[bool] = field(default_factory=list)
    criteria_match: bool = True
    matched: bool = True
    confidence: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": int(self.step_number),
            "element_matches": list(self.element_matches),
            "criteria_match": bool(self.criteria_match),
            "matched": bool(self.matched),
            "confidence": float(self.confidence),
        }


# --------------------------------------------------------------------------- #
# Guidance events
# --------------------------------------------------------------------------- #


class GuidanceKind(str, Enum):
    """Type tag of an emitted guidance event."""

    GUIDANCE = "guidance"


class GuidancePriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass
class GuidanceEvent:
    """One advisory message shown to the learner."""

    text: str
    timestamp: float = field(default_factory=time.time)
    kind: GuidanceKind = GuidanceKind.GUIDANCE
    priority: GuidancePriority = GuidancePriority.NORMAL

    # Source number of the step the advice was produced for.
    step_number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "timestamp": self.timestamp,
            "kind": self.kind.value,
            "priority": self.priority.value,
            "step_number": self.step_number,
        }


# --------------------------------------------------------------------------- #
# Orchestrator notices and status
# --------------------------------------------------------------------------- #


class NoticeKind(str, Enum):
    """
    Kind of notice published on the orchestrator channel.

    GUIDANCE:
        A new GuidanceEvent was emitted.
    ERROR:
        A collaborator failed during a cycle; the loop keeps running.
    STARTED / STOPPED:
        Lifecycle transitions of the loop.
    """

    GUIDANCE = "guidance"
    ERROR = "error"
    STARTED = "started"
    STOPPED = "stopped"


@dataclass
class GuidanceNotice:
    """Message delivered to channel subscribers."""

    kind: NoticeKind
    timestamp: float = field(default_factory=time.time)
    event: Optional[GuidanceEvent] = None

    # For ERROR notices: the failing stage ("observe", "generate") and
    # a printable description of the failure.
    stage: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "timestamp": self.timestamp,
            "event": self.event.to_dict() if self.event else None,
            "stage": self.stage,
            "error": self.error,
        }


class OrchestratorState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class GuidanceStatus:
    """Point-in-time view of the guidance loop, for hosts."""

    state: OrchestratorState
    current_guidance: Optional[str] = None
    guidance_count: int = 0
    observation_count: int = 0
    cycles_run: int = 0
    cycles_skipped: int = 0
    last_error: Optional[str] = None
    interval_seconds: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.state == OrchestratorState.RUNNING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "is_active": self.is_active,
            "current_guidance": self.current_guidance,
            "guidance_count": int(self.guidance_count),
            "observation_count": int(self.observation_count),
            "cycles_run": int(self.cycles_run),
            "cycles_skipped": int(self.cycles_skipped),
            "last_error": self.last_error,
            "interval_seconds": float(self.interval_seconds),
        }


__all__ = [
    "MatchResult",
    "GuidanceKind",
    "GuidancePriority",
    "GuidanceEvent",
    "NoticeKind",
    "GuidanceNotice",
    "OrchestratorState",
    "GuidanceStatus",
]
