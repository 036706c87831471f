"""Keyed and free text extraction tests."""

from __future__ import annotations

from testcase_importer.import_orchestration import extract_freeform, extract_structured_blocks


def test_structured_text_splits_into_one_block_per_title() -> None:
    text = """Test Case ID: TC-1
Title: Login works
Steps:
Open the login page
Submit credentials
Expected Result: Dashboard shown

Test Case ID: TC-2
Title: Logout works
Priority: High
"""

    blocks = extract_structured_blocks(text)

    assert blocks == [
        {
            "test_case_id": "TC-1",
            "title": "Login works",
            "stepsToReproduce": "Open the login page\nSubmit credentials",
            "expectedResult": "Dashboard shown",
        },
        {"test_case_id": "TC-2", "title": "Logout works", "priority": "High"},
    ]


def test_repeated_title_starts_a_new_block() -> None:
    blocks = extract_structured_blocks("Title: A\nStatus: Pass\nTitle: B\nStatus: Fail\n")

    assert blocks == [{"title": "A", "status": "Pass"}, {"title": "B", "status": "Fail"}]


def test_leading_unlabelled_lines_supply_title_and_description() -> None:
    blocks = extract_structured_blocks("Checkout flow\nPays with card\nPriority: Low\nStatus: Pass")

    assert blocks == [
        {
            "title": "Checkout flow",
            "description": "Pays with card",
            "priority": "Low",
            "status": "Pass",
        }
    ]


def test_freeform_uses_first_line_as_title() -> None:
    record = extract_freeform(
        "Check password reset\nUser requests a reset link\nPriority: High\nLink arrives by email"
    )

    assert record == {
        "title": "Check password reset",
        "priority": "High",
        "description": "User requests a reset link\nLink arrives by email",
    }


def test_freeform_of_blank_text_is_empty() -> None:
    assert extract_freeform("  \n ") == {}
