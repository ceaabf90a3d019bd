"""
Observation models.

An Observation is one timestamped snapshot of what is currently visible
to the learner: detected UI elements, detected text fragments, and the
labels inferred from them. Observations are produced by an
ObservationSource and are read-only to everything downstream.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


# Maximum age (seconds) of an Observation before it must be re-captured.
DEFAULT_FRESHNESS_SECONDS = 5.0

UNKNOWN_ACTIVITY = "unknown"
UNKNOWN_APPLICATION = "unknown"


@dataclass
class Position:
    """Screen position of a detection, in the source's own coordinates."""

    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": int(self.x), "y": int(self.y)}


def _position_from(payload: Any) -> Optional[Position]:
    if not isinstance(payload, Mapping):
        return None
    return Position(x=int(payload.get("x", 0)), y=int(payload.get("y", 0)))


@dataclass
class DetectedElement:
    """A UI element found on screen ("button", "menu", "input", ...)."""

    element_type: str
    text: str = ""
    position: Optional[Position] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.element_type,
            "text": self.text,
            "position": self.position.to_dict() if self.position else None,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DetectedElement":
        return cls(
            element_type=str(payload.get("type") or "unknown"),
            text=str(payload.get("text") or ""),
            position=_position_from(payload.get("position")),
        )


@dataclass
class TextFragment:
    """A piece of text recognized on screen."""

    text: str
    position: Optional[Position] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "position": self.position.to_dict() if self.position else None,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> "TextFragment":
        if isinstance(payload, str):
            return cls(text=payload)
        return cls(
            text=str(payload.get("text") or ""),
            position=_position_from(payload.get("position")),
        )


@dataclass
class Observation:
    """
    Snapshot of the learner's current screen.

    `captured_at` is a POSIX timestamp (seconds). An observation older than
    the freshness threshold must be refreshed before it is used.
    """

    captured_at: float = field(default_factory=time.time)

    elements: List[DetectedElement] = field(default_factory=list)
    text_fragments: List[TextFragment] = field(default_factory=list)

    # Inferred labels.
    application_context: str = UNKNOWN_APPLICATION
    user_activity: str = UNKNOWN_ACTIVITY
    activity_confidence: float = 0.0

    # Source name, resolution, etc.
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls, **metadata: Any) -> "Observation":
        """Return a "no data available" observation."""
        return cls(metadata=dict(metadata))

    def age(self, now: Optional[float] = None) -> float:
        if now is None:
            now = time.time()
        return max(0.0, now - self.captured_at)

    def is_stale(
        self,
        threshold: float = DEFAULT_FRESHNESS_SECONDS,
        now: Optional[float] = None,
    ) -> bool:
        return self.age(now) > threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "captured_at": self.captured_at,
            "elements": [el.to_dict() for el in self.elements],
            "text_fragments": [t.to_dict() for t in self.text_fragments],
            "application_context": self.application_context,
            "user_activity": self.user_activity,
            "activity_confidence": float(self.activity_confidence),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Observation":
        """
        Build an Observation from a plain mapping (YAML/JSON shaped).

        Missing keys fall back to the "no data available" defaults; a
        missing `captured_at` means "now".
        """
        captured_at = payload.get("captured_at")
        return cls(
            captured_at=float(captured_at) if captured_at is not None else time.time(),
            elements=[
                DetectedElement.from_dict(el) for el in payload.get("elements") or []
            ],
            text_fragments=[
                TextFragment.from_dict(t) for t in payload.get("text_fragments") or []
            ],
            application_context=str(
                payload.get("application_context") or UNKNOWN_APPLICATION
            ),
            user_activity=str(payload.get("user_activity") or UNKNOWN_ACTIVITY),
            activity_confidence=float(payload.get("activity_confidence") or 0.0),
            metadata=dict(payload.get("metadata") or {}),
        )


__all__ = [
    "DEFAULT_FRESHNESS_SECONDS",
    "UNKNOWN_ACTIVITY",
    "UNKNOWN_APPLICATION",
    "Position",
    "DetectedElement",
    "TextFragment",
    "Observation",
]
