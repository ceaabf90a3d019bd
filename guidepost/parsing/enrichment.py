"""
Optional expected-element enrichment.

Instructional documents usually quote the labels the learner has to look
for: Click "Run", open the `Console` tab. This pass collects those quoted
labels from a step's title, description and sub-steps into
`Step.expected_elements`, so the criteria matcher has something to check
against.

The parser never calls this; hosts opt in.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable, List

from guidepost.models.project import Step


QUOTED_LABEL_RE = re.compile(r'"([^"\n]+)"|“([^”\n]+)”|`([^`\n]+)`')

# Quoted text longer than this is most likely code or a sentence, not a label.
MAX_LABEL_LENGTH = 40


def extract_quoted_labels(texts: Iterable[str]) -> List[str]:
    """Return quoted labels found in `texts`, deduplicated case-insensitively."""
    labels: List[str] = []
    seen = set()
    for text in texts:
        for match in QUOTED_LABEL_RE.finditer(text):
            label = next(g for g in match.groups() if g is not None).strip()
            if not label or len(label) > MAX_LABEL_LENGTH:
                continue
            key = label.lower()
            if key in seen:
                continue
            seen.add(key)
            labels.append(label)
    return labels


def enrich_steps(steps: Iterable[Step]) -> List[Step]:
    """
    Return copies of `steps` with expected elements filled in.

    Steps that already carry expected elements are returned unchanged.
    """
    enriched: List[Step] = []
    for step in steps:
        if step.expected_elements:
            enriched.append(step)
            continue
        labels = extract_quoted_labels([step.title, step.description, *step.sub_steps])
        enriched.append(
            dataclasses.replace(
                step,
                sub_steps=list(step.sub_steps),
                expected_elements=labels,
            )
        )
    return enriched


__all__ = [
    "extract_quoted_labels",
    "enrich_steps",
]
