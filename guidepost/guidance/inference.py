"""
Heuristic labelling of raw detections.

Capture backends often produce only elements and text. These helpers
derive the coarse labels an Observation carries (application context,
user activity with a confidence) from simple substring rules, so such a
backend can still produce complete observations.

The rules are intentionally crude; a vision model can replace them by
filling the labels itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from guidepost.models.observation import (
    UNKNOWN_APPLICATION,
    DetectedElement,
    Observation,
    TextFragment,
)


@dataclass(frozen=True)
class ActivityRule:
    """
    Maps a detection pattern to an activity label.

    A rule fires when any text fragment contains one of `text_markers`, or
    any element of type `element_type` (any type when None) contains one
    of `element_markers`.
    """

    activity: str
    confidence: float
    text_markers: Tuple[str, ...] = ()
    element_markers: Tuple[str, ...] = ()
    element_type: Optional[str] = None


APPLICATION_RULES: Tuple[ActivityRule, ...] = (
    ActivityRule("code_editor", 1.0, text_markers=("console.log",)),
    ActivityRule("code_editor", 1.0, element_markers=("New File",), element_type="button"),
)

ACTIVITY_RULES: Tuple[ActivityRule, ...] = (
    ActivityRule("coding", 0.8, text_markers=("function", "const")),
    ActivityRule("testing_code", 0.7, element_markers=("Run",), element_type="button"),
)

DEFAULT_ACTIVITY = ("browsing", 0.5)


def _rule_fires(
    rule: ActivityRule,
    elements: Sequence[DetectedElement],
    texts: Sequence[TextFragment],
) -> bool:
    for fragment in texts:
        if any(marker in fragment.text for marker in rule.text_markers):
            return True
    for element in elements:
        if rule.element_type is not None and element.element_type != rule.element_type:
            continue
        if any(marker in element.text for marker in rule.element_markers):
            return True
    return False


def infer_application_context(
    elements: Sequence[DetectedElement],
    texts: Sequence[TextFragment],
) -> str:
    for rule in APPLICATION_RULES:
        if _rule_fires(rule, elements, texts):
            return rule.activity
    return UNKNOWN_APPLICATION


def infer_user_activity(
    elements: Sequence[DetectedElement],
    texts: Sequence[TextFragment],
) -> Tuple[str, float]:
    """Return (activity, confidence); falls back to ("browsing", 0.5)."""
    for rule in ACTIVITY_RULES:
        if _rule_fires(rule, elements, texts):
            return rule.activity, rule.confidence
    return DEFAULT_ACTIVITY


def observation_from_detections(
    elements: Iterable[DetectedElement],
    texts: Iterable[TextFragment],
    *,
    captured_at: Optional[float] = None,
    **metadata: Any,
) -> Observation:
    """
    Build a labelled Observation from raw detections.

    With no detections at all the result is the "no data available"
    observation (activity "unknown").
    """
    element_list: List[DetectedElement] = list(elements)
    text_list: List[TextFragment] = list(texts)

    observation = Observation.empty(**metadata)
    if captured_at is not None:
        observation.captured_at = captured_at
    if not element_list and not text_list:
        return observation

    activity, confidence = infer_user_activity(element_list, text_list)
    observation.elements = element_list
    observation.text_fragments = text_list
    observation.application_context = infer_application_context(element_list, text_list)
    observation.user_activity = activity
    observation.activity_confidence = confidence
    return observation


__all__ = [
    "ActivityRule",
    "APPLICATION_RULES",
    "ACTIVITY_RULES",
    "infer_application_context",
    "infer_user_activity",
    "observation_from_detections",
]
