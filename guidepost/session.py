"""
Learning session: the host-facing surface of Guidepost.

A LearningSession owns one ProgressTracker and one GuidanceOrchestrator and
exposes the operations a host (desktop overlay, web bridge, CLI) needs:

- Project loading:     load_project()
- Progression:         get_current_step(), get_next_step(),
                       get_remaining_steps(), get_progress(), get_summary(),
                       advance(), jump_to(), mark_completed(), reset_project()
- Guidance loop:       start_guidance(), stop_guidance(),
                       get_guidance_status(), get_guidance_history(),
                       clear_guidance_history(), get_observation_history(),
                       subscribe()

Sessions are explicit instances; the host constructs one per learner and
owns its lifetime. Only `load_project` can raise, and only when no document
text can be obtained.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from guidepost.config import GuidepostConfig
from guidepost.documents import (
    DirectoryDocumentSource,
    DocumentPayload,
    DocumentSource,
)
from guidepost.errors import DocumentNotFoundError, DocumentSourceError
from guidepost.guidance.generator_interface import (
    GuidanceGenerator,
    TemplateGuidanceGenerator,
)
from guidepost.guidance.http_generator import HttpGeneratorConfig, HttpGuidanceGenerator
from guidepost.guidance.observation_interface import (
    NullObservationSource,
    ObservationSource,
)
from guidepost.guidance.orchestrator import (
    DEFAULT_HISTORY_LIMIT,
    GuidanceOrchestrator,
    NoticeListener,
    OrchestratorConfig,
)
from guidepost.models.guidance import GuidanceEvent, GuidanceStatus
from guidepost.models.observation import Observation
from guidepost.models.project import Project, Step
from guidepost.parsing.documents import derive_title, normalize_document
from guidepost.parsing.enrichment import enrich_steps
from guidepost.parsing.step_parser import parse_steps
from guidepost.progress.tracker import ProgressSummary, ProgressTracker

LOG = logging.getLogger(__name__)


def build_generator(config: GuidepostConfig) -> GuidanceGenerator:
    """Instantiate the guidance generator selected in `config`."""
    gen = config.generator
    if gen.type == "http":
        return HttpGuidanceGenerator(
            HttpGeneratorConfig(
                url=gen.url or "",
                api_key=gen.api_key,
                api_key_header=gen.api_key_header,
                timeout=gen.timeout,
                options=dict(gen.options),
            )
        )
    return TemplateGuidanceGenerator()


class LearningSession:
    """
    One learner working through one project at a time.

    Typical usage:

        session = LearningSession(
            observation_source=my_source,
            generator=TemplateGuidanceGenerator(),
        )
        session.load_project("intro-js", document_text)
        session.subscribe(show_notice)
        session.start_guidance()
        ...
        session.advance()
        ...
        session.stop_guidance()
    """

    def __init__(
        self,
        observation_source: Optional[ObservationSource] = None,
        generator: Optional[GuidanceGenerator] = None,
        *,
        document_source: Optional[DocumentSource] = None,
        orchestrator_config: Optional[OrchestratorConfig] = None,
        enrich_expected_elements: bool = False,
        tracker: Optional[ProgressTracker] = None,
    ) -> None:
        self._tracker = tracker or ProgressTracker()
        self._document_source = document_source
        self._enrich = enrich_expected_elements
        self._orchestrator = GuidanceOrchestrator(
            tracker=self._tracker,
            observation_source=observation_source or NullObservationSource(),
            generator=generator or TemplateGuidanceGenerator(),
            config=orchestrator_config,
        )

    @classmethod
    def from_config(
        cls,
        config: GuidepostConfig,
        observation_source: Optional[ObservationSource] = None,
    ) -> "LearningSession":
        """Build a session and its collaborators from a GuidepostConfig."""
        document_source: Optional[DocumentSource] = None
        if config.documents.directory is not None:
            document_source = DirectoryDocumentSource(config.documents.directory)
        return cls(
            observation_source=observation_source,
            generator=build_generator(config),
            document_source=document_source,
            orchestrator_config=config.orchestrator_config(),
            enrich_expected_elements=config.documents.enrich_expected_elements,
        )

    @property
    def tracker(self) -> ProgressTracker:
        return self._tracker

    @property
    def orchestrator(self) -> GuidanceOrchestrator:
        return self._orchestrator

    # ------------------------------------------------------------------ #
    # Project loading
    # ------------------------------------------------------------------ #

    def load_project(
        self,
        project_id: str,
        raw_text: Optional[DocumentPayload] = None,
    ) -> Project:
        """
        Parse a project document and make it the active project.

        Args:
            project_id:
                Identifier of the project.
            raw_text:
                The document: a string, or a stored record mapping with
                `content`/`document` and `title`. When omitted, it is
                fetched from the configured document source.

        Raises:
            DocumentNotFoundError if the document source has no such
            project (or no source is configured).
            DocumentSourceError if the source failed otherwise.
        """
        payload = raw_text if raw_text is not None else self._fetch(project_id)

        document = normalize_document(payload)
        steps = parse_steps(document.raw_text)
        if self._enrich:
            steps = enrich_steps(steps)

        project = Project(
            project_id=project_id,
            title=document.title or derive_title(document.raw_text, project_id),
            raw_text=document.raw_text,
            steps=steps,
        )
        return self._tracker.load(project)

    def _fetch(self, project_id: str) -> DocumentPayload:
        if self._document_source is None:
            raise DocumentNotFoundError(
                project_id,
                f"Project '{project_id}' not found: no document source configured",
            )
        try:
            return self._document_source.fetch(project_id)
        except DocumentSourceError:
            LOG.error("Could not load project '%s'", project_id)
            raise
        except Exception as exc:  # noqa: BLE001
            LOG.exception("Document source failed for project '%s'", project_id)
            raise DocumentSourceError(
                f"Document source failed for project '{project_id}': {exc}"
            ) from exc

    # ------------------------------------------------------------------ #
    # Progression
    # ------------------------------------------------------------------ #

    def get_current_step(self) -> Optional[Step]:
        return self._tracker.current_step()

    def get_next_step(self) -> Optional[Step]:
        return self._tracker.next_step()

    def get_remaining_steps(self) -> List[Step]:
        return self._tracker.remaining_steps()

    def get_progress(self) -> int:
        return self._tracker.progress()

    def get_summary(self) -> Optional[ProgressSummary]:
        return self._tracker.summary()

    def advance(self) -> Optional[Step]:
        return self._tracker.advance()

    def jump_to(self, index: int) -> Optional[Step]:
        return self._tracker.jump_to(index)

    def mark_completed(self, index: int) -> bool:
        return self._tracker.mark_completed(index)

    def reset_project(self) -> None:
        self._tracker.reset()

    # ------------------------------------------------------------------ #
    # Guidance
    # ------------------------------------------------------------------ #

    def start_guidance(self) -> bool:
        if self._tracker.current_step() is None:
            LOG.warning("Starting guidance without an active step; cycles will idle")
        return self._orchestrator.start()

    def stop_guidance(self, wait: bool = False) -> bool:
        return self._orchestrator.stop(wait=wait)

    def get_guidance_status(self) -> GuidanceStatus:
        return self._orchestrator.status()

    def get_guidance_history(
        self, limit: Optional[int] = DEFAULT_HISTORY_LIMIT
    ) -> List[GuidanceEvent]:
        return self._orchestrator.guidance_history(limit)

    def clear_guidance_history(self) -> None:
        self._orchestrator.clear_guidance_history()

    def get_observation_history(
        self, limit: Optional[int] = DEFAULT_HISTORY_LIMIT
    ) -> List[Observation]:
        return self._orchestrator.observation_history(limit)

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        return self._orchestrator.subscribe(listener)


__all__ = [
    "build_generator",
    "LearningSession",
]
