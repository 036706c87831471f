"""Normalization of mapped records into test case drafts."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from testcase_importer.column_mapping.mapping_models import FieldName

from .draft_models import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    PLACEHOLDER_TITLE_PREFIX,
    CustomFieldValue,
    DraftCategory,
    DraftPriority,
    DraftStatus,
    TestCaseDraft,
)

_SEPARATOR_PATTERN = re.compile(r"[\s_\-]+")
_PRIORITY_CODE_PATTERN = re.compile(r"^p\s*(\d)\b")

_STATUS_ALIASES = {
    "not executed": DraftStatus.PENDING,
    "not started": DraftStatus.PENDING,
    "not run": DraftStatus.PENDING,
    "notstarted": DraftStatus.PENDING,
    "open": DraftStatus.PENDING,
    "todo": DraftStatus.PENDING,
    "passed": DraftStatus.PASS,
    "success": DraftStatus.PASS,
    "ok": DraftStatus.PASS,
    "failed": DraftStatus.FAIL,
    "failure": DraftStatus.FAIL,
    "error": DraftStatus.FAIL,
    "running": DraftStatus.IN_PROGRESS,
    "inprogress": DraftStatus.IN_PROGRESS,
    "wip": DraftStatus.IN_PROGRESS,
    "block": DraftStatus.BLOCKED,
    "stuck": DraftStatus.BLOCKED,
}
_PRIORITY_ALIASES = {
    "critical": DraftPriority.HIGH,
    "urgent": DraftPriority.HIGH,
    "blocker": DraftPriority.HIGH,
    "important": DraftPriority.HIGH,
    "highest": DraftPriority.HIGH,
    "normal": DraftPriority.MEDIUM,
    "standard": DraftPriority.MEDIUM,
    "moderate": DraftPriority.MEDIUM,
    "minor": DraftPriority.LOW,
    "trivial": DraftPriority.LOW,
    "lowest": DraftPriority.LOW,
}
_CATEGORY_ALIASES = {
    "nonfunctional": DraftCategory.NON_FUNCTIONAL,
    "non functional": DraftCategory.NON_FUNCTIONAL,
    "end to end": DraftCategory.E2E,
    "endtoend": DraftCategory.E2E,
    "unit test": DraftCategory.UNIT,
    "integration test": DraftCategory.INTEGRATION,
    "smoke test": DraftCategory.SMOKE,
    "regression test": DraftCategory.REGRESSION,
}

_ATTRIBUTE_BY_KEY = {
    **{field.value.lower(): field.attribute for field in FieldName},
    **{field.attribute: field.attribute for field in FieldName},
}


def normalize(
    mapped: Mapping[object, object],
    row_index: int,
    project_id: str,
    suite_id: str | None = None,
    *,
    custom_fields: Mapping[str, object] | None = None,
) -> TestCaseDraft:
    """Turn a partially mapped record into a draft with defaults applied.

    Keys of ``mapped`` may be ``FieldName`` members, their camelCase values or
    snake_case attribute names; any other key is kept as a custom field.
    Unrecognised status, priority and category values fall back to their
    defaults and the raw value is kept as ``original_<attribute>``.
    """
    values: dict[str, str | None] = {}
    extras: dict[str, CustomFieldValue] = {}
    for key, raw in mapped.items():
        attribute = _attribute_for(key)
        if attribute is None:
            extras[str(key)] = to_custom_value(raw)
        else:
            values[attribute] = to_text(raw, date_only=attribute == "execution_date")
    for key, raw in (custom_fields or {}).items():
        extras[key] = to_custom_value(raw)

    generated: list[str] = []
    title = values.get("title")
    if not title:
        title = f"{PLACEHOLDER_TITLE_PREFIX} {row_index}"
        generated.append("title")

    status = _coerce_or_default(
        values.get("status"), coerce_status, DEFAULT_STATUS, "status", extras, generated
    )
    priority = _coerce_or_default(
        values.get("priority"), coerce_priority, DEFAULT_PRIORITY, "priority", extras, generated
    )
    category = _coerce_or_default(
        values.get("category"), coerce_category, DEFAULT_CATEGORY, "category", extras, generated
    )

    return TestCaseDraft(
        title=title,
        description=values.get("description") or "",
        status=status,
        project_id=project_id,
        suite_id=suite_id,
        position=row_index,
        expected_result=values.get("expected_result"),
        priority=priority,
        category=category,
        assigned_tester=values.get("assigned_tester"),
        execution_date=values.get("execution_date"),
        notes=values.get("notes"),
        actual_result=values.get("actual_result"),
        environment=values.get("environment"),
        prerequisites=values.get("prerequisites"),
        platform=values.get("platform"),
        steps_to_reproduce=values.get("steps_to_reproduce"),
        custom_fields=extras,
        generated_fields=tuple(generated),
    )


def coerce_status(value: str | None) -> str | None:
    """Return the matching status value, or None when nothing matches."""
    return _coerce(value, DraftStatus, _STATUS_ALIASES)


def coerce_priority(value: str | None) -> str | None:
    """Return the matching priority value, or None when nothing matches.

    Priority codes (``P0``..``P4``, including labels such as ``P0 - Critical``)
    map P0/P1 to High, P2 to Medium and anything lower to Low.
    """
    exact = _coerce(value, DraftPriority, _PRIORITY_ALIASES)
    if exact is not None or not value:
        return exact
    code = _PRIORITY_CODE_PATTERN.match(value.strip().lower())
    if code is None:
        return None
    level = int(code.group(1))
    if level <= 1:
        return DraftPriority.HIGH.value
    if level == 2:
        return DraftPriority.MEDIUM.value
    return DraftPriority.LOW.value


def coerce_category(value: str | None) -> str | None:
    """Return the matching category value, or None when nothing matches."""
    return _coerce(value, DraftCategory, _CATEGORY_ALIASES)


def to_text(value: object, *, date_only: bool = False) -> str | None:
    """Render a cell value as stripped text; blank values become None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat() if date_only else value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def to_custom_value(value: object) -> CustomFieldValue:
    """Keep scalar cell values, rendering anything else as text."""
    if value is None or isinstance(value, bool | int | float):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, str):
        return value.strip() or None
    return to_text(value)


def _attribute_for(key: object) -> str | None:
    if isinstance(key, FieldName):
        return key.attribute
    return _ATTRIBUTE_BY_KEY.get(str(key).strip().lower())


def _coerce(value: str | None, enum_type: type[Enum], aliases: Mapping[str, Enum]) -> str | None:
    if not value:
        return None
    lowered = value.strip().lower()
    for member in enum_type:
        if member.value.lower() == lowered:
            return member.value
    key = _SEPARATOR_PATTERN.sub(" ", lowered).strip()
    for member in enum_type:
        if _SEPARATOR_PATTERN.sub(" ", member.value.lower()) == key:
            return member.value
    alias = aliases.get(key) or aliases.get(key.replace(" ", ""))
    return alias.value if alias is not None else None


# pylint: disable=too-many-arguments
def _coerce_or_default(
    raw: str | None,
    coerce: Callable[[str | None], str | None],
    default: str,
    attribute: str,
    extras: dict[str, CustomFieldValue],
    generated: list[str],
) -> str:
    coerced = coerce(raw)
    if coerced is not None:
        return coerced
    if raw:
        extras[f"original_{attribute}"] = raw
    generated.append(attribute)
    return default
