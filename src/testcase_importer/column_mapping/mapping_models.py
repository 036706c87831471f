"""Column mapping entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SKIP = "skip"


class FieldName(str, Enum):
    """Canonical test-case attributes a source column can feed."""

    TITLE = "title"
    DESCRIPTION = "description"
    EXPECTED_RESULT = "expectedResult"
    STATUS = "status"
    PRIORITY = "priority"
    CATEGORY = "category"
    ASSIGNED_TESTER = "assignedTester"
    EXECUTION_DATE = "executionDate"
    NOTES = "notes"
    ACTUAL_RESULT = "actualResult"
    ENVIRONMENT = "environment"
    PREREQUISITES = "prerequisites"
    PLATFORM = "platform"
    STEPS_TO_REPRODUCE = "stepsToReproduce"

    @property
    def attribute(self) -> str:
        """Snake-case attribute name on ``TestCaseDraft``."""
        return _ATTRIBUTE_NAMES[self]


_ATTRIBUTE_NAMES = {
    FieldName.TITLE: "title",
    FieldName.DESCRIPTION: "description",
    FieldName.EXPECTED_RESULT: "expected_result",
    FieldName.STATUS: "status",
    FieldName.PRIORITY: "priority",
    FieldName.CATEGORY: "category",
    FieldName.ASSIGNED_TESTER: "assigned_tester",
    FieldName.EXECUTION_DATE: "execution_date",
    FieldName.NOTES: "notes",
    FieldName.ACTUAL_RESULT: "actual_result",
    FieldName.ENVIRONMENT: "environment",
    FieldName.PREREQUISITES: "prerequisites",
    FieldName.PLATFORM: "platform",
    FieldName.STEPS_TO_REPRODUCE: "steps_to_reproduce",
}


class ConfidenceTier(str, Enum):
    """Coarse confidence bucket attached to a column mapping."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


TIER_SCORES = {
    ConfidenceTier.HIGH: 0.9,
    ConfidenceTier.MEDIUM: 0.7,
    ConfidenceTier.LOW: 0.6,
}
SKIP_SCORE = 0.1
OVERRIDE_SCORE = 1.0


class CustomColumnType(str, Enum):
    """Column types a proposed custom column can take."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    DATE = "date"


@dataclass(frozen=True)
class ColumnMatch:
    """Result of matching one header against the rule table.

    ``rank`` is the index of the winning rule; lower ranks are more specific
    and win when two headers claim the same field.
    """

    field: FieldName | None
    tier: ConfidenceTier
    confidence: float
    rank: int | None = None

    @property
    def is_skip(self) -> bool:
        """Return True when no canonical field matched."""
        return self.field is None


@dataclass(frozen=True)
class ColumnMapping:
    """Mapping of one source header to a canonical field, or to skip."""

    source_column: str
    target_field: FieldName | None
    confidence_tier: ConfidenceTier
    confidence: float
    is_override: bool = False

    @property
    def is_skip(self) -> bool:
        """Return True when the column does not feed a canonical field."""
        return self.target_field is None

    @property
    def target_label(self) -> str:
        """Target field value, or ``skip``."""
        return SKIP if self.target_field is None else self.target_field.value


@dataclass(frozen=True)
class CustomColumnProposal:
    """Suggested custom column for a header that matched no canonical field."""

    name: str
    label: str
    inferred_type: CustomColumnType
    suggested_options: tuple[str, ...] | None = None
