"""
Boundary normalization for project documents.

Project payloads arrive in more than one shape: a plain string, or a
mapping (stored project record) carrying the text under `content` or
`document`, often next to a `title`. Everything is reduced here to a
single canonical NormalizedDocument before it reaches the step parser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from guidepost.parsing.step_parser import match_step_header

LOG = logging.getLogger(__name__)


TEXT_KEYS = ("content", "document")


@dataclass(frozen=True)
class NormalizedDocument:
    """Canonical raw text of a project, with its title if one was given."""

    raw_text: str
    title: Optional[str] = None


def normalize_document(payload: Any) -> NormalizedDocument:
    """
    Normalize a project payload.

    Accepted shapes:
        - str: used as is.
        - Mapping with a string `content` or `document` value (first one
          wins), and an optional string `title`.

    Anything else is logged and treated as an empty document, which the
    parser turns into an empty step list.
    """
    if isinstance(payload, str):
        return NormalizedDocument(raw_text=payload)

    if isinstance(payload, Mapping):
        title = payload.get("title")
        title = title.strip() if isinstance(title, str) and title.strip() else None
        for key in TEXT_KEYS:
            value = payload.get(key)
            if isinstance(value, str):
                return NormalizedDocument(raw_text=value, title=title)
        LOG.warning(
            "Project payload has no text under %s; keys=%s",
            "/".join(TEXT_KEYS),
            sorted(str(k) for k in payload.keys()),
        )
        return NormalizedDocument(raw_text="", title=title)

    LOG.warning("Unknown project payload type: %s", type(payload).__name__)
    return NormalizedDocument(raw_text="")


def derive_title(raw_text: str, default: str) -> str:
    """
    Pick a display title from the preamble of a document.

    Uses the first non-empty line before the first step header, with any
    leading markdown `#` removed. Falls back to `default`.
    """
    for raw_line in raw_text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if match_step_header(line) is not None:
            break
        title = line.lstrip("#").strip()
        if title:
            return title
    return default


__all__ = [
    "NormalizedDocument",
    "normalize_document",
    "derive_title",
]
