from guidepost.parsing.step_parser import parse_steps


LESSON = """# Your first JavaScript statement

In this exercise you will use the browser console.

1. Open the console
   Every modern browser ships developer tools.
   - Press F12
   - Select the "Console" tab
   Expected result: The Console panel is visible
2. Type your first statement
   - console.log("Hello")
   Guidance: Press Enter after typing.
3. Celebrate
"""


def test_two_steps_with_sub_steps() -> None:
    steps = parse_steps("1. Open console\n- press F12\n2. Type code\n- console.log(1)")
    assert len(steps) == 2
    assert steps[0].step_number == 1
    assert steps[0].title == "Open console"
    assert steps[0].sub_steps == ["press F12"]
    assert steps[1].sub_steps == ["console.log(1)"]


def test_full_lesson_fields() -> None:
    steps = parse_steps(LESSON)
    assert [s.step_number for s in steps] == [1, 2, 3]

    first = steps[0]
    assert first.description == "Every modern browser ships developer tools."
    assert first.sub_steps == ["Press F12", 'Select the "Console" tab']
    assert first.verification_criteria == "The Console panel is visible"
    assert first.expected_elements == []
    assert first.completed is False

    second = steps[1]
    assert second.sub_steps == ['console.log("Hello")']
    assert second.guidance_text == "Press Enter after typing."
    assert second.verification_criteria == ""

    third = steps[2]
    assert third.title == "Celebrate"
    assert third.description == ""
    assert third.sub_steps == []


def test_preamble_lines_are_discarded() -> None:
    steps = parse_steps("Intro text\n- stray bullet\n1. Only step")
    assert len(steps) == 1
    assert steps[0].description == ""
    assert steps[0].sub_steps == []


def test_description_lines_are_space_joined() -> None:
    steps = parse_steps("1. Step\nfirst line\n\n   second line   \n")
    assert steps[0].description == "first line second line"


def test_expected_result_marker_is_case_insensitive() -> None:
    steps = parse_steps("1. Step\nEXPECTED RESULT:   Green tick shown  ")
    assert steps[0].verification_criteria == "Green tick shown"


def test_no_numbered_lines_gives_empty_list() -> None:
    assert parse_steps("") == []
    assert parse_steps("just prose\n- and a bullet") == []


def test_header_requires_space_after_dot() -> None:
    steps = parse_steps("1. Real step\n2.not a header")
    assert len(steps) == 1
    assert steps[0].description == "2.not a header"


def test_gaps_and_duplicate_numbers_are_kept_in_order() -> None:
    steps = parse_steps("3. C\n7. G\n3. C again\n10. J")
    assert [s.step_number for s in steps] == [3, 7, 3, 10]
    assert [s.title for s in steps] == ["C", "G", "C again", "J"]


def test_step_count_matches_numbered_line_count() -> None:
    for k in range(0, 12):
        document = "\n".join(f"{i * 2 + 1}. Step {i}\n- sub\ntext" for i in range(k))
        assert len(parse_steps(document)) == k


def test_dash_without_space_is_description() -> None:
    steps = parse_steps("1. Step\n-nospace")
    assert steps[0].sub_steps == []
    assert steps[0].description == "-nospace"


def test_non_string_input_returns_empty_list() -> None:
    assert parse_steps(None) == []  # type: ignore[arg-type]
    assert parse_steps({"content": "1. x"}) == []  # type: ignore[arg-type]


def test_bulleted_expected_result_is_a_sub_step() -> None:
    steps = parse_steps("1. Open\n- Expected result: Console opens")
    assert steps[0].sub_steps == ["Expected result: Console opens"]
    assert steps[0].verification_criteria == ""


def test_guidance_marker_anywhere_in_line() -> None:
    steps = parse_steps("1. Run\nHint, guidance: press the green button\nGUIDANCE: be patient")
    assert steps[0].guidance_text == "be patient"
    assert steps[0].description == ""

    steps = parse_steps("1. Run\nTip guidance: press Run")
    assert steps[0].guidance_text == "Tip  press Run"


def test_only_newlines_split_lines() -> None:
    steps = parse_steps("1. Step\nfirst\x0c2. not a header\nsecond - not a sub-step")
    assert len(steps) == 1
    assert steps[0].sub_steps == []
    assert steps[0].description == "first\x0c2. not a header second - not a sub-step"


def test_windows_line_endings() -> None:
    steps = parse_steps("1. Step\r\n- sub\r\n2. Next\r\n")
    assert [s.title for s in steps] == ["Step", "Next"]
    assert steps[0].sub_steps == ["sub"]
