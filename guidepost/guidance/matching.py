"""
Criteria matching for the guidance loop.

Answers "does what is on screen look like what this step expects?" with a
per-element breakdown and a normalized confidence score.

This is a local, deterministic heuristic based on case-insensitive
substring containment. It is not the judge of whether the learner is done:
that call belongs to the guidance generator, which receives the
MatchResult as one input next to the raw Observation.
"""

from __future__ import annotations

from typing import Iterable, List

from guidepost.models.guidance import MatchResult
from guidepost.models.observation import Observation
from guidepost.models.project import Step


# --------------------------------------------------------------------------- #
# Containment helpers
# --------------------------------------------------------------------------- #


def _any_contains(haystacks: Iterable[str], needle: str) -> bool:
    needle_lower = needle.lower()
    return any(needle_lower in (text or "").lower() for text in haystacks)


def match_elements(expected: Iterable[str], observation: Observation) -> List[bool]:
    """One boolean per expected element: is it contained in any element text?"""
    element_texts = [el.text for el in observation.elements]
    return [_any_contains(element_texts, name) for name in expected]


def match_criteria(criteria: str, observation: Observation) -> bool:
    """Empty criteria always match; otherwise search the text fragments."""
    if not criteria:
        return True
    return _any_contains((t.text for t in observation.text_fragments), criteria)


def match_confidence(element_matches: List[bool], criteria_match: bool) -> float:
    """
    Mean of the element match fraction and the criteria score.

    An empty element list contributes a fraction of 1.0. Both terms are in
    [0, 1], so the result is too.
    """
    if element_matches:
        element_score = sum(1 for m in element_matches if m) / float(len(element_matches))
    else:
        element_score = 1.0
    criteria_score = 1.0 if criteria_match else 0.0
    return (element_score + criteria_score) / 2.0


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #


def match_step(step: Step, observation: Observation) -> MatchResult:
    """Compare a step's expectations against an observation."""
    element_matches = match_elements(step.expected_elements, observation)
    criteria_match = match_criteria(step.verification_criteria, observation)

    return MatchResult(
        step_number=step.step_number,
        element_matches=element_matches,
        criteria_match=criteria_match,
        matched=all(element_matches) and criteria_match,
        confidence=match_confidence(element_matches, criteria_match),
    )


__all__ = [
    "match_elements",
    "match_criteria",
    "match_confidence",
    "match_step",
]
