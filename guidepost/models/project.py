"""
Project and step models.

A Project is one instructional document decomposed into ordered Steps.
Steps are produced by the step parser and are treated as immutable,
except for the `completed` flag which only the progression tracker sets.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Step:
    """
    One numbered unit of instruction.

    `step_number` is the number written in the source document. It is not
    renumbered and may repeat or skip; callers index steps positionally.
    """

    step_number: int
    title: str

    # Free text accumulated from non-list lines after the header.
    description: str = ""

    sub_steps: List[str] = field(default_factory=list)

    # UI labels the learner should see while working on this step.
    # Empty unless an enrichment pass fills it.
    expected_elements: List[str] = field(default_factory=list)

    # Text expected somewhere on screen once the step is done.
    verification_criteria: str = ""

    # Optional author-supplied hint ("Guidance: ..." lines).
    guidance_text: str = ""

    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": int(self.step_number),
            "title": self.title,
            "description": self.description,
            "sub_steps": list(self.sub_steps),
            "expected_elements": list(self.expected_elements),
            "verification_criteria": self.verification_criteria,
            "guidance_text": self.guidance_text,
            "completed": bool(self.completed),
        }


@dataclass
class Project:
    """A loaded instructional document and its parsed steps."""

    project_id: str
    title: str
    raw_text: str
    steps: List[Step] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    @property
    def step_count(self) -> int:
        return len(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "title": self.title,
            "raw_text": self.raw_text,
            "steps": [s.to_dict() for s in self.steps],
            "created_at": self.created_at,
        }


__all__ = ["Step", "Project"]
