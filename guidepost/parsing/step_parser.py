"""
Step parser.

Turns a semi-structured instructional document into an ordered list of
Step records. The expected layout is the one produced by the project
generator:

    1. Open the browser console
       - Press F12
       Expected result: The DevTools panel opens
    2. Type your first statement
       - console.log("Hello")

Parsing is line based and never fails: text with no numbered lines simply
yields no steps.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from guidepost.models.project import Step

LOG = logging.getLogger(__name__)


STEP_HEADER_RE = re.compile(r"^(\d+)\.\s+(.+)$")

SUB_STEP_PREFIX = "- "
EXPECTED_RESULT_MARKER = "expected result:"
GUIDANCE_MARKER = "guidance:"
GUIDANCE_MARKER_RE = re.compile(re.escape(GUIDANCE_MARKER), re.IGNORECASE)


def _text_after_marker(line: str, marker: str) -> str:
    idx = line.lower().find(marker)
    return line[idx + len(marker):].strip()


def match_step_header(line: str) -> Optional[re.Match]:
    """Return the header match for an already-trimmed line, or None."""
    return STEP_HEADER_RE.match(line)


def parse_steps(document: str) -> List[Step]:
    """
    Parse `document` into Steps, in source order.

    Rules, applied to each trimmed line:

    - "N. Title" opens a new step (the previous one is flushed).
    - A line starting with "- " adds a sub-step, even when it carries one
      of the markers below.
    - A line containing "expected result:" (any case) sets the open step's
      verification criteria to the text after the marker.
    - A line containing "guidance:" (any case) sets the open step's
      guidance text to the line with the marker removed.
    - Any other non-empty line is appended to the description.

    Lines are split on "\\n" only. Lines before the first header are ignored. Step numbers are kept as
    written; duplicates and gaps are preserved.
    """
    if not isinstance(document, str):
        LOG.warning(
            "parse_steps expected str, got %s; returning no steps",
            type(document).__name__,
        )
        return []

    steps: List[Step] = []
    current: Optional[Step] = None

    for raw_line in document.split("\n"):
        line = raw_line.strip()

        header = match_step_header(line)
        if header is not None:
            if current is not None:
                steps.append(current)
            current = Step(step_number=int(header.group(1)), title=header.group(2).strip())
            continue

        if current is None or not line:
            continue

        if line.startswith(SUB_STEP_PREFIX):
            current.sub_steps.append(line[len(SUB_STEP_PREFIX):].strip())
            continue

        lowered = line.lower()
        if EXPECTED_RESULT_MARKER in lowered:
            current.verification_criteria = _text_after_marker(
                line, EXPECTED_RESULT_MARKER
            )
            continue

        if GUIDANCE_MARKER in lowered:
            current.guidance_text = GUIDANCE_MARKER_RE.sub("", line, count=1).strip()
            continue

        if current.description:
            current.description += " " + line
        else:
            current.description = line

    if current is not None:
        steps.append(current)

    LOG.debug("Parsed %d step(s) from document", len(steps))
    return steps


__all__ = [
    "STEP_HEADER_RE",
    "match_step_header",
    "parse_steps",
]
