"""Line based extraction for keyed and free text input."""

from __future__ import annotations

from collections.abc import Sequence

from testcase_importer.column_mapping import FieldName
from testcase_importer.format_detection import parse_keyed_line
from testcase_importer.format_detection.keyed_lines import (
    ACTUAL_RESULT,
    ASSIGNED_TESTER,
    AUTOMATION_STATUS,
    CATEGORY,
    DESCRIPTION,
    ENVIRONMENT,
    EXECUTION_DATE,
    EXPECTED_RESULT,
    NOTES,
    PLATFORM,
    PREREQUISITES,
    PRIORITY,
    STATUS,
    STEPS,
    TEST_CASE_ID,
    TITLE,
)

TEST_CASE_ID_KEY = "test_case_id"
AUTOMATION_STATUS_KEY = "automation_status"

_RECORD_KEYS = {
    TITLE: FieldName.TITLE.value,
    DESCRIPTION: FieldName.DESCRIPTION.value,
    STEPS: FieldName.STEPS_TO_REPRODUCE.value,
    EXPECTED_RESULT: FieldName.EXPECTED_RESULT.value,
    ACTUAL_RESULT: FieldName.ACTUAL_RESULT.value,
    PRIORITY: FieldName.PRIORITY.value,
    STATUS: FieldName.STATUS.value,
    CATEGORY: FieldName.CATEGORY.value,
    PREREQUISITES: FieldName.PREREQUISITES.value,
    ENVIRONMENT: FieldName.ENVIRONMENT.value,
    PLATFORM: FieldName.PLATFORM.value,
    NOTES: FieldName.NOTES.value,
    ASSIGNED_TESTER: FieldName.ASSIGNED_TESTER.value,
    EXECUTION_DATE: FieldName.EXECUTION_DATE.value,
    TEST_CASE_ID: TEST_CASE_ID_KEY,
    AUTOMATION_STATUS: AUTOMATION_STATUS_KEY,
}
# a repeated key from this set starts the next test case
_BLOCK_START_KEYS = frozenset({FieldName.TITLE.value, TEST_CASE_ID_KEY})


def extract_structured_blocks(text: str) -> list[dict[str, str]]:
    """Split ``Label: value`` text into one record per test case.

    Unlabelled lines continue the previous field; before any field they
    supply the title, then the description.
    """
    blocks: list[dict[str, str]] = []
    current: dict[str, str] = {}
    last_key: str | None = None
    for line in _content_lines(text):
        keyed = parse_keyed_line(line)
        if keyed is None:
            last_key = _append_unlabelled(current, last_key, line)
            continue
        key = _RECORD_KEYS[keyed[0]]
        if key in current and key in _BLOCK_START_KEYS:
            blocks.append(current)
            current = {}
        value = keyed[1].strip()
        if key in current:
            current[key] = _join(current[key], value)
        else:
            current[key] = value
        last_key = key
    if current:
        blocks.append(current)
    return [block for block in blocks if any(block.values())]


def extract_freeform(text: str) -> dict[str, str]:
    """Read free text as one record: first line is the title, the rest the description.

    Recognised ``Label: value`` lines still populate their field.
    """
    lines = _content_lines(text)
    if not lines:
        return {}
    record = {FieldName.TITLE.value: lines[0]}
    body: list[str] = []
    for line in lines[1:]:
        keyed = parse_keyed_line(line)
        if keyed is None or not keyed[1].strip():
            body.append(line)
            continue
        key = _RECORD_KEYS[keyed[0]]
        if key == FieldName.TITLE.value:
            body.append(line)
        else:
            record[key] = keyed[1].strip()
    if body:
        description = record.get(FieldName.DESCRIPTION.value)
        record[FieldName.DESCRIPTION.value] = "\n".join(
            ([description] if description else []) + body
        )
    return record


def _append_unlabelled(record: dict[str, str], last_key: str | None, line: str) -> str | None:
    if last_key is not None:
        record[last_key] = _join(record[last_key], line)
        return last_key
    if FieldName.TITLE.value not in record:
        record[FieldName.TITLE.value] = line
        return None
    key = FieldName.DESCRIPTION.value
    record[key] = _join(record.get(key, ""), line)
    return key


def _join(existing: str, addition: str) -> str:
    if not addition:
        return existing
    return f"{existing}\n{addition}" if existing else addition


def _content_lines(text: str) -> Sequence[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]
