"""Duplicate title detection tests."""

from __future__ import annotations

from testcase_importer.draft_normalization import find_duplicate_titles, normalize


def _drafts(*titles: str):
    return [
        normalize({"title": title}, row_index=index, project_id="proj-1")
        for index, title in enumerate(titles, start=1)
    ]


def test_repeated_titles_are_reported_against_first_occurrence() -> None:
    warnings = find_duplicate_titles(_drafts("Login", "Logout", " login ", "LOGIN"))

    assert warnings == [
        "Row 3: duplicate title 'login' (first seen in row 1).",
        "Row 4: duplicate title 'LOGIN' (first seen in row 1).",
    ]


def test_unique_titles_produce_no_warnings() -> None:
    assert find_duplicate_titles(_drafts("Login", "Logout")) == []
