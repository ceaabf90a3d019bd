"""
Observation source interface.

An observation source reports what is currently visible to the learner.
How pixels become elements and text (OCR, accessibility APIs, vision
models) is entirely up to the implementation; the rest of Guidepost only
consumes the resulting Observation objects.

This module has no dependencies and contains no capture code.
Concrete sources are swapped in without touching the parser, tracker,
matcher or orchestrator.
"""

from __future__ import annotations

import copy
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from guidepost.errors import ObservationError
from guidepost.models.observation import Observation


class ObservationSource(ABC):
    """
    Abstract base class for observation sources.

    Sources must be side-effect free with respect to the learner's
    applications: they look, they never click or type.
    """

    @abstractmethod
    def capture(self) -> Observation:
        """
        Capture the current screen state.

        Returns:
            A fresh Observation. Sources with nothing to report should
            return `Observation.empty()` rather than raise.

        Raises:
            ObservationError if the capture itself failed.
        """
        raise NotImplementedError


class NullObservationSource(ObservationSource):
    """Always reports "no data available"."""

    def capture(self) -> Observation:
        return Observation.empty(source="null")


@dataclass
class StaticObservationSource(ObservationSource):
    """
    Returns copies of a fixed observation, re-stamped with the capture time.

    Useful for tests, demos, and hosts where detection happens out of band
    and the latest result is pushed in with `update()`.
    """

    base_observation: Observation = field(default_factory=Observation.empty)

    def update(self, observation: Observation) -> None:
        self.base_observation = observation

    def capture(self) -> Observation:
        if self.base_observation is None:
            raise ObservationError("No observation available")
        snapshot = copy.deepcopy(self.base_observation)
        snapshot.captured_at = time.time()
        return snapshot


__all__ = [
    "ObservationError",
    "ObservationSource",
    "NullObservationSource",
    "StaticObservationSource",
]
