import itertools

from guidepost.guidance.matching import match_confidence, match_step
from guidepost.models.observation import DetectedElement, Observation, TextFragment
from guidepost.models.project import Step


def observation(elements=(), texts=()) -> Observation:
    return Observation(
        elements=[DetectedElement(element_type="button", text=t) for t in elements],
        text_fragments=[TextFragment(text=t) for t in texts],
    )


def test_element_substring_match_case_insensitive() -> None:
    step = Step(step_number=4, title="Open", expected_elements=["Console"])
    result = match_step(step, observation(elements=["Developer Console"]))
    assert result.step_number == 4
    assert result.element_matches == [True]
    assert result.criteria_match is True
    assert result.matched is True
    assert result.confidence == 1.0

    result = match_step(step, observation(elements=["developer CONSOLE"]))
    assert result.matched is True


def test_partial_element_match() -> None:
    step = Step(step_number=1, title="x", expected_elements=["Run", "Save", "Share"])
    result = match_step(step, observation(elements=["Run code", "save all"]))
    assert result.element_matches == [True, True, False]
    assert result.matched is False
    # (2/3 + 1) / 2
    assert abs(result.confidence - (2 / 3 + 1) / 2) < 1e-9


def test_criteria_checked_against_text_fragments_only() -> None:
    step = Step(step_number=1, title="x", verification_criteria="Hello World")
    assert match_step(step, observation(texts=["> hello world"])).criteria_match is True

    result = match_step(step, observation(elements=["Hello World"]))
    assert result.criteria_match is False
    assert result.matched is False
    assert result.confidence == 0.5


def test_empty_expectations_are_vacuously_true() -> None:
    step = Step(step_number=1, title="x")
    result = match_step(step, Observation.empty())
    assert result.element_matches == []
    assert result.matched is True
    assert result.confidence == 1.0


def test_nothing_matches() -> None:
    step = Step(
        step_number=1,
        title="x",
        expected_elements=["Run"],
        verification_criteria="done",
    )
    result = match_step(step, Observation.empty())
    assert result.element_matches == [False]
    assert result.matched is False
    assert result.confidence == 0.0


def test_confidence_always_in_unit_interval() -> None:
    for size in range(0, 5):
        for matches in itertools.product([True, False], repeat=size):
            for criteria in (True, False):
                value = match_confidence(list(matches), criteria)
                assert 0.0 <= value <= 1.0
