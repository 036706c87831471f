"""Import orchestration entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from testcase_importer.column_mapping import ColumnMapping, CustomColumnProposal
from testcase_importer.draft_normalization import TestCaseDraft
from testcase_importer.format_detection import ImportFormat

RawInput = str | Sequence[Mapping[str, object]]


@dataclass(frozen=True)
class ImportContext:
    """Caller supplied target and manual column overrides.

    ``column_overrides`` maps a source header to a field name (camelCase or
    snake_case) or ``skip``.
    """

    project_id: str
    suite_id: str | None = None
    column_overrides: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportResult:  # pylint: disable=too-many-instance-attributes
    """Output contract for one import run."""

    format: ImportFormat
    confidence: float
    drafts: tuple[TestCaseDraft, ...]
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    proposed_columns: tuple[CustomColumnProposal, ...] = ()
    column_mappings: tuple[ColumnMapping, ...] = ()
