from guidepost.guidance.inference import (
    infer_application_context,
    infer_user_activity,
    observation_from_detections,
)
from guidepost.models.observation import DetectedElement, Observation, TextFragment


def test_code_editor_detected_from_text() -> None:
    texts = [TextFragment(text='console.log("Hello World")')]
    assert infer_application_context([], texts) == "code_editor"


def test_code_editor_detected_from_new_file_button() -> None:
    elements = [DetectedElement(element_type="button", text="New File")]
    assert infer_application_context(elements, []) == "code_editor"
    menu = [DetectedElement(element_type="menu", text="New File")]
    assert infer_application_context(menu, []) == "unknown"


def test_activity_rules_in_priority_order() -> None:
    coding = [TextFragment(text="const x = 1")]
    run_button = [DetectedElement(element_type="button", text="Run")]

    assert infer_user_activity([], coding) == ("coding", 0.8)
    assert infer_user_activity(run_button, []) == ("testing_code", 0.7)
    assert infer_user_activity(run_button, coding) == ("coding", 0.8)
    assert infer_user_activity([], [TextFragment(text="news")]) == ("browsing", 0.5)


def test_observation_from_detections_labels() -> None:
    obs = observation_from_detections(
        [DetectedElement(element_type="button", text="Run")],
        [TextFragment(text="Welcome")],
        captured_at=123.0,
        source="ocr",
    )
    assert obs.captured_at == 123.0
    assert obs.user_activity == "testing_code"
    assert obs.activity_confidence == 0.7
    assert obs.application_context == "unknown"
    assert obs.metadata == {"source": "ocr"}


def test_no_detections_is_no_data_observation() -> None:
    obs = observation_from_detections([], [])
    assert obs.user_activity == "unknown"
    assert obs.elements == []
    assert obs.text_fragments == []


def test_observation_round_trip_from_plain_mapping() -> None:
    obs = Observation.from_dict(
        {
            "captured_at": 10,
            "elements": [{"type": "button", "text": "Run", "position": {"x": 1, "y": 2}}],
            "text_fragments": ["plain text", {"text": "with position"}],
        }
    )
    assert obs.captured_at == 10.0
    assert obs.elements[0].element_type == "button"
    assert obs.elements[0].position.to_dict() == {"x": 1, "y": 2}
    assert [t.text for t in obs.text_fragments] == ["plain text", "with position"]
    assert obs.user_activity == "unknown"
    assert obs.is_stale(5.0, now=16.0) is True
    assert obs.is_stale(5.0, now=15.0) is False
