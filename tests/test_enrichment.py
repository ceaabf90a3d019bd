from guidepost.models.project import Step
from guidepost.parsing.enrichment import enrich_steps, extract_quoted_labels


def test_extract_quoted_labels_all_quote_styles() -> None:
    labels = extract_quoted_labels(
        ['Click "Run" then “Save”', "open the `Console` tab", 'press "run" again']
    )
    assert labels == ["Run", "Save", "Console"]


def test_long_quoted_text_is_not_a_label() -> None:
    long_text = "x" * 60
    assert extract_quoted_labels([f'type "{long_text}"']) == []


def test_enrich_steps_returns_copies() -> None:
    original = Step(step_number=1, title='Open "Settings"', sub_steps=['Click "Privacy"'])
    kept = Step(step_number=2, title='Open "Other"', expected_elements=["Manual"])

    enriched = enrich_steps([original, kept])

    assert enriched[0].expected_elements == ["Settings", "Privacy"]
    assert enriched[0] is not original
    assert original.expected_elements == []
    assert enriched[1] is kept


def test_description_labels_are_collected() -> None:
    step = Step(
        step_number=1,
        title="Open the editor",
        description='Click the "New File" button.',
        sub_steps=["Choose `JavaScript`"],
    )
    assert enrich_steps([step])[0].expected_elements == ["New File", "JavaScript"]
