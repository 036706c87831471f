"""Import use-case tests for overrides, limits and diagnostics."""

from __future__ import annotations

from testcase_importer.configuration import ImportSettings
from testcase_importer.format_detection import ImportFormat
from testcase_importer.import_orchestration import ImportContext, run


def test_manual_override_replaces_heuristic_mapping() -> None:
    context = ImportContext(project_id="proj-1", column_overrides={"scenario": "title"})

    result = run("Scenario,Priority\nLogin,High\n", context)

    assert result.drafts[0].title == "Login"
    assert result.column_mappings[0].is_override
    assert result.proposed_columns == ()


def test_unknown_override_is_reported_and_ignored() -> None:
    context = ImportContext(project_id="proj-1", column_overrides={"Priority": "severity"})

    result = run("Title,Priority\nLogin,High\n", context)

    assert result.drafts[0].priority == "High"
    assert result.errors == (
        "Column override for 'Priority' ignored: Unknown test case field: 'severity'",
    )


def test_missing_title_generates_placeholder_and_row_error() -> None:
    result = run("Description,Priority\nSome steps,High\n", ImportContext(project_id="proj-1"))

    (draft,) = result.drafts
    assert draft.title == "Imported Test Case 1"
    assert result.errors
    assert result.errors[0].startswith("Row 1: Title is missing")


def test_rows_beyond_limit_are_dropped_with_warning() -> None:
    text = "Title\tPriority\nA\tHigh\nB\tLow\nC\tMedium\n"

    result = run(text, ImportContext(project_id="proj-1"), ImportSettings(max_rows=2))

    assert [draft.title for draft in result.drafts] == ["A", "B"]
    assert "Input has 3 rows; only the first 2 were imported." in result.warnings


def test_text_beyond_limit_is_truncated_with_warning() -> None:
    text = "Title,Priority\nLogin,High\nLogout,Low\n"

    result = run(text, ImportContext(project_id="proj-1"), ImportSettings(max_input_chars=20))

    assert "Input exceeds 20 characters and was truncated." in result.warnings
    assert len(result.drafts) == 1


def test_duplicate_titles_are_warned() -> None:
    result = run("Title\tPriority\nLogin\tHigh\nlogin\tLow\n", ImportContext(project_id="proj-1"))

    assert "Row 2: duplicate title 'login' (first seen in row 1)." in result.warnings


def test_outline_without_test_cases_falls_back_to_freeform() -> None:
    text = "TEST EXECUTION PRIORITY\n1. AUTH\n1.1 Login\nTC1: Login\n"

    result = run(text, ImportContext(project_id="proj-1"))

    assert result.format is ImportFormat.FREEFORM
    assert result.confidence == 0.3
    assert [draft.title for draft in result.drafts] == ["TEST EXECUTION PRIORITY"]
    assert result.warnings[:4] == (
        "Outline line '1. AUTH' inside the test execution priority block was ignored.",
        "Outline line '1.1 Login' inside the test execution priority block was ignored.",
        "Outline line 'TC1: Login' inside the test execution priority block was ignored.",
        "No test cases found in the outline; importing as free text.",
    )


def test_leading_priority_label_does_not_swallow_the_outline() -> None:
    text = "P0 - Critical\n1. AUTH\n1.1 Login\nTC1: Login\n"

    result = run(text, ImportContext(project_id="proj-1"))

    assert result.format is ImportFormat.HIERARCHICAL
    assert [draft.title for draft in result.drafts] == ["Login"]


def test_header_only_paste_yields_mappings_and_no_drafts() -> None:
    result = run("Title,Status\n", ImportContext(project_id="proj-1"))

    assert result.format is ImportFormat.CSV
    assert result.drafts == ()
    assert [mapping.source_column for mapping in result.column_mappings] == ["Title", "Status"]
    assert result.warnings == ("Delimited input has a header row but no data rows.",)


def test_configured_freeform_confidence_is_reported() -> None:
    result = run(
        "just a note", ImportContext(project_id="proj-1"), ImportSettings(freeform_confidence=0.2)
    )

    assert result.confidence == 0.2
