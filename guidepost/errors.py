"""
Exception hierarchy for Guidepost.

Only document loading surfaces these to the host. Collaborator failures
inside the guidance loop are caught, logged and reported as notices.
"""

from __future__ import annotations

from typing import Optional


class GuidepostError(Exception):
    """Base class for all Guidepost errors."""


class DocumentSourceError(GuidepostError):
    """Raised when a document source cannot supply a project document."""


class DocumentNotFoundError(DocumentSourceError):
    """
    Raised when a document source has no document for a project id.

    Attributes:
        project_id:
            Identifier that was requested.
    """

    def __init__(self, project_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Project '{project_id}' not found")
        self.project_id = project_id


class ObservationError(GuidepostError):
    """
    Raised by observation sources when the current state cannot be captured
    (capture backend unavailable, permissions denied, etc.).
    """


class GenerationError(GuidepostError):
    """
    Raised by guidance generators when no advisory text could be produced
    (timeout, transport error, malformed response).

    Attributes:
        status:
            HTTP status code, if the generator is HTTP backed.
    """

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is not None:
            base = f"[{self.status}] {base}"
        return base


class ConfigError(GuidepostError):
    """Raised when a configuration file is missing or invalid."""


__all__ = [
    "GuidepostError",
    "DocumentSourceError",
    "DocumentNotFoundError",
    "ObservationError",
    "GenerationError",
    "ConfigError",
]
