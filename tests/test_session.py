from pathlib import Path

import pytest

from guidepost.config import config_from_dict
from guidepost.documents import DocumentSource, InMemoryDocumentSource
from guidepost.errors import DocumentNotFoundError, DocumentSourceError
from guidepost.guidance.generator_interface import TemplateGuidanceGenerator
from guidepost.guidance.http_generator import HttpGuidanceGenerator
from guidepost.guidance.observation_interface import StaticObservationSource
from guidepost.models.guidance import OrchestratorState
from guidepost.models.observation import DetectedElement, Observation
from guidepost.session import LearningSession, build_generator


LESSON = """# Hello JavaScript

1. Open the editor
Click the "New File" button.
- Choose JavaScript
Expected result: an empty file

2. Write code
Guidance: type the classic first program
Expected result: Hello World

3. Run it
"""


def test_load_project_from_raw_text() -> None:
    session = LearningSession()
    project = session.load_project("hello-js", LESSON)

    assert project.project_id == "hello-js"
    assert project.title == "Hello JavaScript"
    assert project.step_count == 3
    assert session.get_current_step().title == "Open the editor"
    assert session.get_next_step().title == "Write code"
    assert session.get_progress() == 0
    assert session.get_current_step().expected_elements == []


def test_load_project_with_enrichment() -> None:
    session = LearningSession(enrich_expected_elements=True)
    session.load_project("hello-js", LESSON)
    assert session.get_current_step().expected_elements == ["New File"]


def test_load_project_from_record_mapping() -> None:
    session = LearningSession()
    project = session.load_project("p", {"title": "Stored", "content": LESSON})
    assert project.title == "Stored"
    assert project.step_count == 3


def test_load_project_from_document_source() -> None:
    source = InMemoryDocumentSource({"hello-js": {"document": LESSON}})
    session = LearningSession(document_source=source)
    project = session.load_project("hello-js")
    assert project.step_count == 3


def test_unknown_project_raises_not_found() -> None:
    session = LearningSession(document_source=InMemoryDocumentSource())
    with pytest.raises(DocumentNotFoundError) as excinfo:
        session.load_project("missing")
    assert excinfo.value.project_id == "missing"
    assert session.tracker.project is None


def test_no_document_source_raises_not_found() -> None:
    with pytest.raises(DocumentNotFoundError):
        LearningSession().load_project("anything")


def test_source_failure_is_wrapped() -> None:
    class BrokenSource(DocumentSource):
        def fetch(self, project_id: str):
            raise RuntimeError("database down")

    session = LearningSession(document_source=BrokenSource())
    with pytest.raises(DocumentSourceError) as excinfo:
        session.load_project("p")
    assert "database down" in str(excinfo.value)


def test_empty_document_yields_empty_project() -> None:
    session = LearningSession()
    project = session.load_project("empty", "")
    assert project.step_count == 0
    assert session.get_current_step() is None
    assert session.get_progress() == 0


def test_progression_operations() -> None:
    session = LearningSession()
    session.load_project("hello-js", LESSON)

    assert session.advance().step_number == 2
    assert session.mark_completed(0) is True
    assert session.get_progress() == 33
    assert [s.step_number for s in session.get_remaining_steps()] == [2, 3]
    assert session.jump_to(2).step_number == 3
    assert session.jump_to(7) is None

    summary = session.get_summary()
    assert summary.current_step == 3
    assert summary.completed_steps == 1

    session.reset_project()
    assert session.get_current_step() is None
    assert session.get_summary() is None


def test_guidance_through_session() -> None:
    source = StaticObservationSource(
        Observation(elements=[DetectedElement(element_type="button", text="Settings")])
    )
    session = LearningSession(
        observation_source=source,
        generator=TemplateGuidanceGenerator(),
        enrich_expected_elements=True,
    )
    session.load_project("hello-js", LESSON)
    received = []
    session.subscribe(received.append)

    event = session.orchestrator.run_cycle()
    assert event is not None
    assert event.text.startswith("Step 1: look for")
    assert [e.text for e in session.get_guidance_history()] == [event.text]
    assert len(session.get_observation_history()) == 1
    assert received[0].event is event

    session.clear_guidance_history()
    assert session.get_guidance_history() == []

    status = session.get_guidance_status()
    assert status.state == OrchestratorState.STOPPED
    assert status.current_guidance == event.text


def test_start_and_stop_guidance() -> None:
    session = LearningSession()
    assert session.start_guidance() is True
    assert session.start_guidance() is False
    assert session.get_guidance_status().is_active is True
    assert session.stop_guidance(wait=True) is True
    assert session.stop_guidance() is False


def test_from_config(tmp_path: Path) -> None:
    (tmp_path / "intro.md").write_text(LESSON, encoding="utf-8")
    config = config_from_dict(
        {
            "guidance": {"interval_seconds": 1.5},
            "documents": {"directory": str(tmp_path), "enrich_expected_elements": True},
        }
    )
    session = LearningSession.from_config(config)
    project = session.load_project("intro")
    assert project.step_count == 3
    assert session.get_current_step().expected_elements == ["New File"]
    assert session.orchestrator.config.interval_seconds == 1.5


def test_build_generator_selects_type() -> None:
    assert isinstance(build_generator(config_from_dict({})), TemplateGuidanceGenerator)
    http = config_from_dict({"generator": {"type": "http", "url": "http://x/g"}})
    assert isinstance(build_generator(http), HttpGuidanceGenerator)
