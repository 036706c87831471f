"""Format detection tests."""

from __future__ import annotations

import pytest
from testcase_importer.format_detection import DetectedFormat, ImportFormat, detect

HIERARCHICAL_TEXT = """1. AUTH
1.1 Login
TC001: Verify login
Expected Result: User is logged in
"""


def test_empty_input_is_freeform_with_zero_confidence() -> None:
    detected = detect("   \n\n  ")

    assert detected == DetectedFormat(format=ImportFormat.FREEFORM, confidence=0.0)


def test_numbered_outline_with_markers_is_hierarchical() -> None:
    detected = detect(HIERARCHICAL_TEXT)

    assert detected.format is ImportFormat.HIERARCHICAL
    assert detected.headers is None
    assert 0.85 < detected.confidence <= 0.95


def test_hierarchical_confidence_grows_with_markers_and_is_capped() -> None:
    many_markers = "1. AUTH\n1.1 Login\n" + "\n".join(f"TC00{i}: Case {i}" for i in range(1, 8))

    few = detect(HIERARCHICAL_TEXT).confidence
    many = detect(many_markers).confidence

    assert many > few
    assert many == pytest.approx(0.95)


def test_outline_without_test_case_markers_is_not_hierarchical() -> None:
    detected = detect("1. AUTH\n1.1 Login\nJust some prose about logging in.")

    assert detected.format is not ImportFormat.HIERARCHICAL


def test_comma_separated_table_is_csv_with_headers() -> None:
    detected = detect("Test Case ID,Title,Priority,Status\nTC-001,Login Test,High,Pending\n")

    assert detected.format is ImportFormat.CSV
    assert detected.headers == ("Test Case ID", "Title", "Priority", "Status")
    assert detected.confidence == pytest.approx(0.9)


def test_tab_separated_table_is_tsv_even_with_commas_in_cells() -> None:
    text = "Title\tDescription\tPriority\nLogin\tUser, password and captcha\tHigh\n"

    detected = detect(text)

    assert detected.format is ImportFormat.TSV
    assert detected.headers == ("Title", "Description", "Priority")
    assert detected.confidence == pytest.approx(0.95)


def test_quoted_commas_are_not_counted_as_delimiters() -> None:
    text = 'Title,Description\n"Login","Enter user, password, then submit"\nLogout,Click logout\n'

    detected = detect(text)

    assert detected.format is ImportFormat.CSV
    assert detected.confidence == pytest.approx(0.9)


def test_single_column_is_not_delimited() -> None:
    detected = detect("Title\nLogin works\nLogout works\n")

    assert detected.format not in (ImportFormat.CSV, ImportFormat.TSV)


def test_inconsistent_delimiters_are_not_delimited() -> None:
    text = "Title,Priority,Status,Owner\nplain line\nanother plain line\nthird line\n"

    detected = detect(text)

    assert detected.format is not ImportFormat.CSV


def test_keyed_text_with_a_comma_in_the_first_line_is_structured() -> None:
    text = (
        "Test Case: Login, logout\n"
        "Description: Verify flow\n"
        "Expected Result: Dashboard\n"
        "Priority: High\n"
    )

    detected = detect(text)

    assert detected.format is ImportFormat.STRUCTURED
    assert detected.headers is None


def test_prose_with_a_single_comma_is_freeform() -> None:
    detected = detect("Login works, mostly\nsee details")

    assert detected.format is ImportFormat.FREEFORM


def test_header_only_line_of_known_labels_is_delimited() -> None:
    detected = detect("Title,Status\n")

    assert detected.format is ImportFormat.CSV
    assert detected.headers == ("Title", "Status")
    assert detected.confidence == pytest.approx(0.9)


def test_single_prose_line_with_comma_is_not_a_header() -> None:
    detected = detect("Login works, mostly")

    assert detected.format is ImportFormat.FREEFORM


def test_keyed_lines_are_structured() -> None:
    text = """Title: Login works
Description: User can sign in
Expected Result: Dashboard is shown
Priority: High
"""

    detected = detect(text)

    assert detected.format is ImportFormat.STRUCTURED
    assert detected.confidence == pytest.approx(0.85)


def test_single_known_key_is_not_structured() -> None:
    detected = detect("Title: Login works\nSome notes about the login flow")

    assert detected.format is ImportFormat.FREEFORM


def test_plain_prose_is_freeform_with_configured_confidence() -> None:
    text = "Check that the login page loads\nand that errors are readable"

    assert detect(text).confidence == pytest.approx(0.3)
    assert detect(text, freeform_confidence=0.2).confidence == pytest.approx(0.2)


@pytest.mark.parametrize(
    "text",
    [
        HIERARCHICAL_TEXT,
        "Title,Priority\nLogin,High\n",
        "Title: Login\nPriority: High\n",
        "free text",
        "",
    ],
)
def test_detection_is_idempotent(text: str) -> None:
    assert detect(text) == detect(text)


def test_confidence_is_clamped_to_unit_interval() -> None:
    assert DetectedFormat(format=ImportFormat.CSV, confidence=1.7).confidence == 1.0
    assert DetectedFormat(format=ImportFormat.CSV, confidence=-0.2).confidence == 0.0
