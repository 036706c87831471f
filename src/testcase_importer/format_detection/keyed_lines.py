"""Recognition of ``Label: value`` lines used by structured test-case text."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

TEST_CASE_ID = "test case id"
TITLE = "title"
DESCRIPTION = "description"
STEPS = "steps"
EXPECTED_RESULT = "expected result"
ACTUAL_RESULT = "actual result"
PRIORITY = "priority"
STATUS = "status"
CATEGORY = "category"
PREREQUISITES = "prerequisites"
ENVIRONMENT = "environment"
PLATFORM = "platform"
NOTES = "notes"
ASSIGNED_TESTER = "assigned tester"
EXECUTION_DATE = "execution date"
AUTOMATION_STATUS = "automation status"

# alias -> canonical label
KNOWN_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "test case id": TEST_CASE_ID,
        "test id": TEST_CASE_ID,
        "tc id": TEST_CASE_ID,
        "test case": TITLE,
        "test case name": TITLE,
        "test case title": TITLE,
        "test name": TITLE,
        "test title": TITLE,
        "title": TITLE,
        "description": DESCRIPTION,
        "desc": DESCRIPTION,
        "summary": DESCRIPTION,
        "steps": STEPS,
        "test steps": STEPS,
        "steps to reproduce": STEPS,
        "procedure": STEPS,
        "expected result": EXPECTED_RESULT,
        "expected results": EXPECTED_RESULT,
        "expected outcome": EXPECTED_RESULT,
        "expected": EXPECTED_RESULT,
        "actual result": ACTUAL_RESULT,
        "actual results": ACTUAL_RESULT,
        "actual": ACTUAL_RESULT,
        "priority": PRIORITY,
        "test priority": PRIORITY,
        "status": STATUS,
        "test status": STATUS,
        "category": CATEGORY,
        "test category": CATEGORY,
        "prerequisites": PREREQUISITES,
        "pre-requisites": PREREQUISITES,
        "preconditions": PREREQUISITES,
        "precondition": PREREQUISITES,
        "environment": ENVIRONMENT,
        "platform": PLATFORM,
        "notes": NOTES,
        "comments": NOTES,
        "assigned to": ASSIGNED_TESTER,
        "assigned tester": ASSIGNED_TESTER,
        "tester": ASSIGNED_TESTER,
        "execution date": EXECUTION_DATE,
        "automation status": AUTOMATION_STATUS,
        "automation": AUTOMATION_STATUS,
    }
)

_ALIAS_ALTERNATION = "|".join(
    re.escape(alias).replace(r"\ ", r"\s+")
    for alias in sorted(KNOWN_LABELS, key=len, reverse=True)
)
KEYED_LINE_PATTERN = re.compile(
    rf"^\s*(?P<label>{_ALIAS_ALTERNATION})\s*:\s*(?P<value>.*?)\s*$",
    re.IGNORECASE,
)


def parse_keyed_line(line: str) -> tuple[str, str] | None:
    """Return ``(canonical_label, value)`` when the line starts with a known label."""
    match = KEYED_LINE_PATTERN.match(line)
    if match is None:
        return None
    alias = " ".join(match.group("label").lower().split())
    return KNOWN_LABELS[alias], match.group("value")
