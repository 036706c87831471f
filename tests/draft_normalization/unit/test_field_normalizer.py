"""Field normalizer tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from testcase_importer.column_mapping import FieldName
from testcase_importer.draft_normalization import (
    coerce_category,
    coerce_priority,
    coerce_status,
    normalize,
)


def test_normalize_maps_field_keys_and_strips_values() -> None:
    draft = normalize(
        {
            FieldName.TITLE: "  Login Test ",
            "expectedResult": "Dashboard shown",
            "assigned_tester": "qa@example.com",
            FieldName.PRIORITY: "high",
            FieldName.STATUS: "pending",
        },
        row_index=1,
        project_id="proj-1",
        suite_id="suite-9",
    )

    assert draft.title == "Login Test"
    assert draft.expected_result == "Dashboard shown"
    assert draft.assigned_tester == "qa@example.com"
    assert draft.priority == "High"
    assert draft.status == "Pending"
    assert draft.category == "Functional"
    assert draft.description == ""
    assert draft.project_id == "proj-1"
    assert draft.suite_id == "suite-9"
    assert draft.position == 1
    assert draft.generated_fields == ("category",)


def test_blank_title_gets_generated_placeholder() -> None:
    draft = normalize({FieldName.TITLE: "   "}, row_index=7, project_id="proj-1")

    assert draft.title == "Imported Test Case 7"
    assert "title" in draft.generated_fields


def test_unknown_keys_become_custom_fields() -> None:
    draft = normalize(
        {"Browser": " Firefox ", "Build": 42},
        row_index=1,
        project_id="proj-1",
        custom_fields={"section": "AUTH", "flaky": True},
    )

    assert draft.custom_fields == {
        "Browser": "Firefox",
        "Build": 42,
        "section": "AUTH",
        "flaky": True,
    }


def test_unrecognised_enum_values_fall_back_and_keep_the_raw_value() -> None:
    draft = normalize(
        {FieldName.TITLE: "Login", FieldName.STATUS: "Exploded", FieldName.CATEGORY: "Chaos"},
        row_index=1,
        project_id="proj-1",
    )

    assert draft.status == "Pending"
    assert draft.category == "Functional"
    assert draft.custom_fields["original_status"] == "Exploded"
    assert draft.custom_fields["original_category"] == "Chaos"


def test_cell_values_are_rendered_as_text() -> None:
    draft = normalize(
        {
            FieldName.TITLE: 1234.0,
            FieldName.EXECUTION_DATE: datetime(2024, 3, 5, 10, 30),
            FieldName.NOTES: None,
        },
        row_index=1,
        project_id="proj-1",
    )

    assert draft.title == "1234"
    assert draft.execution_date == "2024-03-05"
    assert draft.notes is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Pass", "Pass"),
        ("passed", "Pass"),
        ("IN_PROGRESS", "In Progress"),
        ("in-progress", "In Progress"),
        ("not started", "Pending"),
        ("blocked", "Blocked"),
        ("weird", None),
        (None, None),
    ],
)
def test_coerce_status(value: str | None, expected: str | None) -> None:
    assert coerce_status(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("low", "Low"),
        ("critical", "High"),
        ("P0 - Critical", "High"),
        ("p1", "High"),
        ("P2 - Normal", "Medium"),
        ("P3", "Low"),
        ("normal", "Medium"),
        ("someday", None),
    ],
)
def test_coerce_priority(value: str, expected: str | None) -> None:
    assert coerce_priority(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("non functional", "Non-Functional"),
        ("Non-Functional", "Non-Functional"),
        ("e2e", "E2E"),
        ("end-to-end", "E2E"),
        ("smoke test", "Smoke"),
        ("exploratory", None),
    ],
)
def test_coerce_category(value: str, expected: str | None) -> None:
    assert coerce_category(value) == expected
