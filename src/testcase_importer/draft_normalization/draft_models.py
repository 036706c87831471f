"""Test case draft entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

CustomFieldValue = str | int | float | bool | None


class DraftStatus(str, Enum):
    """Execution status values accepted on a draft."""

    PENDING = "Pending"
    PASS = "Pass"
    FAIL = "Fail"
    IN_PROGRESS = "In Progress"
    BLOCKED = "Blocked"


class DraftPriority(str, Enum):
    """Priority values accepted on a draft."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DraftCategory(str, Enum):
    """Category values accepted on a draft."""

    FUNCTIONAL = "Functional"
    NON_FUNCTIONAL = "Non-Functional"
    REGRESSION = "Regression"
    SMOKE = "Smoke"
    INTEGRATION = "Integration"
    UNIT = "Unit"
    E2E = "E2E"


DEFAULT_STATUS = DraftStatus.PENDING.value
DEFAULT_PRIORITY = DraftPriority.MEDIUM.value
DEFAULT_CATEGORY = DraftCategory.FUNCTIONAL.value
PLACEHOLDER_TITLE_PREFIX = "Imported Test Case"


@dataclass(frozen=True)
class TestCaseDraft:  # pylint: disable=too-many-instance-attributes
    """Normalized test case ready to be handed to persistence."""

    __test__ = False

    title: str
    description: str
    status: str
    project_id: str
    suite_id: str | None = None
    position: int = 0
    expected_result: str | None = None
    priority: str | None = None
    category: str | None = None
    assigned_tester: str | None = None
    execution_date: str | None = None
    notes: str | None = None
    actual_result: str | None = None
    environment: str | None = None
    prerequisites: str | None = None
    platform: str | None = None
    steps_to_reproduce: str | None = None
    custom_fields: Mapping[str, CustomFieldValue] = field(default_factory=dict)
    generated_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Validation report for one draft; the cleaned draft is always usable."""

    is_valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    cleaned_draft: TestCaseDraft
