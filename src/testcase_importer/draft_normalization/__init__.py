"""Draft normalization and validation exports."""

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
    ValidationResult,
)
from .draft_validator import EMAIL_REGEX, is_parseable_date, validate
from .duplicate_titles import find_duplicate_titles
from .field_normalizer import (
    coerce_category,
    coerce_priority,
    coerce_status,
    normalize,
    to_custom_value,
    to_text,
)

__all__ = [
    "CustomFieldValue",
    "DEFAULT_CATEGORY",
    "DEFAULT_PRIORITY",
    "DEFAULT_STATUS",
    "DraftCategory",
    "DraftPriority",
    "DraftStatus",
    "EMAIL_REGEX",
    "PLACEHOLDER_TITLE_PREFIX",
    "TestCaseDraft",
    "ValidationResult",
    "coerce_category",
    "coerce_priority",
    "coerce_status",
    "find_duplicate_titles",
    "is_parseable_date",
    "normalize",
    "to_custom_value",
    "to_text",
    "validate",
]
