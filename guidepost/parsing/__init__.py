"""
Document parsing for Guidepost.

- step_parser: raw text to ordered Step records.
- documents: normalization of mixed-shape project payloads.
- enrichment: optional expected-element extraction.
"""

from .step_parser import STEP_HEADER_RE, parse_steps
from .documents import NormalizedDocument, derive_title, normalize_document
from .enrichment import enrich_steps, extract_quoted_labels

__all__ = [
    "STEP_HEADER_RE",
    "parse_steps",
    "NormalizedDocument",
    "derive_title",
    "normalize_document",
    "enrich_steps",
    "extract_quoted_labels",
]
