"""Keyed line recognition tests."""

from __future__ import annotations

import pytest
from testcase_importer.format_detection import parse_keyed_line


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Title: Login works", ("title", "Login works")),
        ("test case: Login works", ("title", "Login works")),
        ("Test Case ID: TC-7", ("test case id", "TC-7")),
        ("Expected:   Dashboard shown  ", ("expected result", "Dashboard shown")),
        ("Steps to   Reproduce: open page", ("steps", "open page")),
        ("Tester: qa@example.com", ("assigned tester", "qa@example.com")),
        ("Steps:", ("steps", "")),
    ],
)
def test_known_labels_resolve_to_canonical_label(line: str, expected: tuple[str, str]) -> None:
    assert parse_keyed_line(line) == expected


@pytest.mark.parametrize("line", ["Browser: Firefox", "Title without colon", "no label here"])
def test_unknown_or_unlabelled_lines_are_not_keyed(line: str) -> None:
    assert parse_keyed_line(line) is None
