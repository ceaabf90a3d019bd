"""
Progression tracker.

Tracks a single learner's position in a loaded Project:

- which step is current (the cursor),
- which steps were marked completed,
- overall progress as a percentage.

The tracker is a small state machine:

    EMPTY --load()--> ACTIVE --reset()--> EMPTY

There is no separate "finished" state: advancing past the last step is a
no-op. No operation raises for well-formed input; out-of-range indices are
reported as "no effect" (None / False).

The tracker is single-writer: only explicit host calls mutate it. The
guidance orchestrator reads it but never writes.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from guidepost.models.project import Project, Step

LOG = logging.getLogger(__name__)


class TrackerState(str, Enum):
    EMPTY = "empty"
    ACTIVE = "active"


@dataclass
class ProgressSummary:
    """
    Counts describing a learner's position in a project.

    `current_step` is 1-based for display; `remaining_steps` includes the
    current step.
    """

    project_id: str
    title: str
    total_steps: int
    current_step: int
    progress: int
    completed_steps: int
    remaining_steps: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "title": self.title,
            "total_steps": self.total_steps,
            "current_step": self.current_step,
            "progress": self.progress,
            "completed_steps": self.completed_steps,
            "remaining_steps": self.remaining_steps,
        }


class ProgressTracker:
    """
    In-memory progression state for one learning session.

    Typical usage:

        tracker = ProgressTracker()
        tracker.load(project)

        step = tracker.current_step()
        # learner works on the step...
        tracker.mark_completed(tracker.cursor)
        tracker.advance()
    """

    def __init__(self) -> None:
        self._project: Optional[Project] = None
        self._cursor: int = 0
        self._completed: Set[int] = set()
        self._last_activity: Optional[float] = None

    # ------------------------------------------------------------------ #
    # Read-only views
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> TrackerState:
        return TrackerState.EMPTY if self._project is None else TrackerState.ACTIVE

    @property
    def project(self) -> Optional[Project]:
        return self._project

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def completed(self) -> Set[int]:
        """Copy of the completed step indices."""
        return set(self._completed)

    @property
    def last_activity(self) -> Optional[float]:
        """POSIX timestamp of the most recent mutation, if any."""
        return self._last_activity

    def __len__(self) -> int:
        return len(self._steps())

    def _steps(self) -> List[Step]:
        return self._project.steps if self._project is not None else []

    def current_step(self) -> Optional[Step]:
        """Return the step at the cursor, or None if empty or out of range."""
        steps = self._steps()
        if 0 <= self._cursor < len(steps):
            return steps[self._cursor]
        return None

    def next_step(self) -> Optional[Step]:
        steps = self._steps()
        if self._cursor + 1 < len(steps):
            return steps[self._cursor + 1]
        return None

    def remaining_steps(self) -> List[Step]:
        """Steps from the cursor (inclusive) to the end."""
        return list(self._steps()[self._cursor:])

    def progress(self) -> int:
        """
        Percentage of the project before the cursor: floor(cursor / N * 100).

        Computed in integers so that e.g. 2 of 3 gives 66, never 66.99...
        """
        total = len(self._steps())
        if total == 0:
            return 0
        return (self._cursor * 100) // total

    def summary(self) -> Optional[ProgressSummary]:
        if self._project is None:
            return None
        total = len(self._project.steps)
        return ProgressSummary(
            project_id=self._project.project_id,
            title=self._project.title,
            total_steps=total,
            current_step=self._cursor + 1,
            progress=self.progress(),
            completed_steps=len(self._completed),
            remaining_steps=total - self._cursor,
        )

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def load(self, project: Project) -> Project:
        """Replace any active project and start at the first step."""
        for step in project.steps:
            step.completed = False
        self._project = project
        self._cursor = 0
        self._completed = set()
        self._touch()
        LOG.info(
            "Loaded project '%s' with %d step(s)", project.project_id, len(project.steps)
        )
        return project

    def advance(self) -> Optional[Step]:
        """
        Move to the next step and return it.

        Returns None (and changes nothing) when already on the last step or
        when no project is loaded.
        """
        if self._cursor < len(self._steps()) - 1:
            self._cursor += 1
            self._touch()
            LOG.info("Moved to step %d", self._cursor + 1)
            return self.current_step()
        return None

    def jump_to(self, index: int) -> Optional[Step]:
        """Move to the step at 0-based `index`; None if out of range."""
        if 0 <= index < len(self._steps()):
            self._cursor = index
            self._touch()
            LOG.info("Moved to step %d", index + 1)
            return self.current_step()
        LOG.debug("jump_to(%s) ignored: %d step(s) loaded", index, len(self._steps()))
        return None

    def mark_completed(self, index: int) -> bool:
        """
        Mark the step at 0-based `index` completed.

        Returns True if the step was newly marked, False if it was already
        completed or the index is out of range.
        """
        steps = self._steps()
        if not 0 <= index < len(steps):
            LOG.debug("mark_completed(%s) ignored: out of range", index)
            return False
        if index in self._completed:
            return False
        self._completed.add(index)
        steps[index].completed = True
        self._touch()
        LOG.info("Marked step %d as completed", index + 1)
        return True

    def reset(self) -> None:
        """Drop the project and all progress."""
        self._project = None
        self._cursor = 0
        self._completed = set()
        self._last_activity = None
        LOG.info("Project reset")

    def _touch(self) -> None:
        self._last_activity = time.time()


__all__ = [
    "TrackerState",
    "ProgressSummary",
    "ProgressTracker",
]
