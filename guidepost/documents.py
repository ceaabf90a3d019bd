"""
Document sources.

A document source supplies the raw instructional payload for a project id.
The payload is either a plain string or a mapping shaped like a stored
project record ({"title": ..., "content": ...}); normalization happens in
`guidepost.parsing.documents`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from guidepost.errors import DocumentNotFoundError, DocumentSourceError

LOG = logging.getLogger(__name__)


DocumentPayload = Union[str, Mapping[str, Any]]


class DocumentSource(ABC):
    """Abstract base class for project document sources."""

    @abstractmethod
    def fetch(self, project_id: str) -> DocumentPayload:
        """
        Return the document payload for `project_id`.

        Raises:
            DocumentNotFoundError if there is no such project.
            DocumentSourceError for any other failure.
        """
        raise NotImplementedError


class InMemoryDocumentSource(DocumentSource):
    """Dictionary-backed source, for tests and embedding hosts."""

    def __init__(self, documents: Optional[Mapping[str, DocumentPayload]] = None) -> None:
        self._documents: Dict[str, DocumentPayload] = dict(documents or {})

    def put(self, project_id: str, payload: DocumentPayload) -> None:
        self._documents[project_id] = payload

    def fetch(self, project_id: str) -> DocumentPayload:
        try:
            return self._documents[project_id]
        except KeyError:
            raise DocumentNotFoundError(project_id) from None


class DirectoryDocumentSource(DocumentSource):
    """
    Reads project documents from files named after the project id.

    Lookup order inside `base_dir`:

        <id>.yaml, <id>.yml  -> mapping with `content` (and `title`)
        <id>.md, <id>.txt    -> raw text
    """

    YAML_SUFFIXES = (".yaml", ".yml")
    TEXT_SUFFIXES = (".md", ".txt")

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _candidate(self, project_id: str) -> Optional[Path]:
        if not project_id or Path(project_id).name != project_id:
            return None
        for suffix in self.YAML_SUFFIXES + self.TEXT_SUFFIXES:
            path = self._base_dir / f"{project_id}{suffix}"
            if path.is_file():
                return path
        return None

    def fetch(self, project_id: str) -> DocumentPayload:
        path = self._candidate(project_id)
        if path is None:
            raise DocumentNotFoundError(
                project_id, f"Project '{project_id}' not found in {self._base_dir}"
            )

        LOG.info("Reading project '%s' from %s", project_id, path)
        try:
            with path.open("r", encoding="utf-8") as f:
                if path.suffix in self.YAML_SUFFIXES:
                    data = yaml.safe_load(f)
                else:
                    return f.read()
        except (OSError, yaml.YAMLError) as exc:
            raise DocumentSourceError(f"Could not read {path}: {exc}") from exc

        if not isinstance(data, Mapping):
            raise DocumentSourceError(f"{path} must contain a mapping at the root")
        return data


__all__ = [
    "DocumentPayload",
    "DocumentSource",
    "InMemoryDocumentSource",
    "DirectoryDocumentSource",
]
