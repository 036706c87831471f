"""Duplicate title detection across one import batch."""

from __future__ import annotations

from collections.abc import Sequence

from .draft_models import TestCaseDraft


def find_duplicate_titles(drafts: Sequence[TestCaseDraft]) -> list[str]:
    """Return one warning per draft whose title repeats an earlier one.

    Titles are compared trimmed and case-insensitively; rows are 1-based.
    """
    first_seen: dict[str, int] = {}
    warnings: list[str] = []
    for row, draft in enumerate(drafts, start=1):
        key = " ".join(draft.title.split()).lower()
        if not key:
            continue
        previous = first_seen.setdefault(key, row)
        if previous != row:
            warnings.append(
                f"Row {row}: duplicate title '{draft.title.strip()}' "
                f"(first seen in row {previous})."
            )
    return warnings
