"""
Guidance generator interface.

A guidance generator turns (current step, observation, match result) into
a short advisory text for the learner. Production generators are usually
remote language-model services and may be slow or fail; the orchestrator
treats any failure as "no new guidance this cycle".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from guidepost.errors import GenerationError
from guidepost.models.guidance import MatchResult
from guidepost.models.observation import Observation
from guidepost.models.project import Step


class GuidanceGenerator(ABC):
    """Abstract base class for guidance generators."""

    @abstractmethod
    def generate(
        self,
        step: Step,
        observation: Observation,
        match: MatchResult,
    ) -> str:
        """
        Produce advisory text for the learner.

        Returns:
            The text to show. An empty string means "nothing to say".

        Raises:
            GenerationError (or any exception) if no text could be produced.
        """
        raise NotImplementedError


class TemplateGuidanceGenerator(GuidanceGenerator):
    """
    Deterministic, local generator built from the step's own content.

    Used as the default when no remote generator is configured, and in
    tests. Priority of messages:

    1. Everything the step checks for is on screen: suggest moving on.
    2. An expected element is missing: point at the first missing one.
    3. The author wrote a "Guidance:" hint: show it.
    4. Otherwise restate the step (first sub-step when present).
    """

    def generate(
        self,
        step: Step,
        observation: Observation,
        match: MatchResult,
    ) -> str:
        has_checks = bool(step.expected_elements or step.verification_criteria)

        if has_checks and match.matched:
            done = step.verification_criteria or "everything this step needs is visible"
            return (
                f"Step {step.step_number} looks done ({done}). "
                "Move on to the next step when you are ready."
            )

        for name, found in zip(step.expected_elements, match.element_matches):
            if not found:
                return f'Step {step.step_number}: look for "{name}" on screen.'

        if step.guidance_text:
            return f"Step {step.step_number}: {step.guidance_text}"

        if step.sub_steps:
            return f"Step {step.step_number}: {step.title}. Start with: {step.sub_steps[0]}"
        return f"Step {step.step_number}: {step.title}"


__all__ = [
    "GenerationError",
    "GuidanceGenerator",
    "TemplateGuidanceGenerator",
]
