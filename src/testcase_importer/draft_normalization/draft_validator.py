"""Draft validation service."""

from __future__ import annotations

import re
from datetime import datetime

from testcase_importer.configuration import ImportSettings

from .draft_models import (
    DraftCategory,
    DraftPriority,
    DraftStatus,
    TestCaseDraft,
    ValidationResult,
)

EMAIL_REGEX = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
GENERIC_TITLES = frozenset({"untitled", "new test", "placeholder", "test", "todo"})
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d.%m.%Y", "%Y/%m/%d")

_ENUM_FIELDS = (
    ("status", DraftStatus),
    ("priority", DraftPriority),
    ("category", DraftCategory),
)


def validate(draft: TestCaseDraft, settings: ImportSettings | None = None) -> ValidationResult:
    """Check one draft and collect errors and warnings without raising."""
    settings = settings or ImportSettings()
    errors: list[str] = []
    warnings: list[str] = []

    title = draft.title.strip()
    if not title:
        errors.append("Title is required.")
    elif "title" in draft.generated_fields:
        errors.append(f"Title is missing; using generated title '{title}'.")
    elif title.lower() in GENERIC_TITLES:
        warnings.append(f"Title '{title}' looks like a placeholder.")

    if len(draft.description) > settings.max_description_length:
        errors.append(
            f"Description exceeds {settings.max_description_length} characters "
            f"({len(draft.description)})."
        )

    for attribute, enum_type in _ENUM_FIELDS:
        value = getattr(draft, attribute)
        if value is not None and value not in {member.value for member in enum_type}:
            errors.append(f"Invalid {attribute} '{value}'.")
        original = draft.custom_fields.get(f"original_{attribute}")
        if original is not None:
            warnings.append(f"Unrecognised {attribute} '{original}'; using '{value}'.")

    if draft.execution_date and not is_parseable_date(draft.execution_date):
        errors.append(f"Execution date '{draft.execution_date}' is not a valid date.")

    if not draft.expected_result:
        warnings.append("Expected result is missing.")

    tester = draft.assigned_tester
    if tester and "@" in tester and not EMAIL_REGEX.fullmatch(tester):
        warnings.append(f"Assigned tester '{tester}' is not a valid email address.")

    return ValidationResult(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
        cleaned_draft=draft,
    )


def is_parseable_date(value: str) -> bool:
    """Return True for ISO timestamps and the common day/month layouts."""
    text = value.strip()
    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        pass
    for pattern in DATE_FORMATS:
        try:
            datetime.strptime(text, pattern)
        except ValueError:
            continue
        return True
    return False
