"""Custom column proposals for headers without a canonical field."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from .mapping_models import ColumnMapping, CustomColumnProposal, CustomColumnType

BOOLEAN_OPTIONS: tuple[str, ...] = ("Yes", "No")
MAX_SELECT_OPTIONS = 5
MIN_SELECT_SAMPLES = 3

_NUMBER_PATTERN = re.compile(r"^[+-]?\d+(?:[.,]\d+)?$")
_DATE_PATTERN = re.compile(r"^(?:\d{4}-\d{1,2}-\d{1,2}(?:[T ].*)?|\d{1,2}[/.]\d{1,2}[/.]\d{2,4})$")
_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
_WORD_PATTERN = re.compile(r"[a-z0-9]+")


def propose_custom_columns(
    mappings: Sequence[ColumnMapping],
    rows: Sequence[Mapping[str, object]] = (),
) -> tuple[CustomColumnProposal, ...]:
    """Build one proposal per skipped column, in header order."""
    proposals: list[CustomColumnProposal] = []
    used_names: set[str] = set()
    for mapping in mappings:
        if not mapping.is_skip:
            continue
        samples = [row.get(mapping.source_column) for row in rows]
        inferred_type, options = infer_column_type(mapping.source_column, samples)
        name = _unique(column_slug(mapping.source_column), used_names)
        proposals.append(
            CustomColumnProposal(
                name=name,
                label=mapping.source_column.strip(),
                inferred_type=inferred_type,
                suggested_options=options,
            )
        )
    return tuple(proposals)


def infer_column_type(
    header: str, sample_values: Sequence[object] = ()
) -> tuple[CustomColumnType, tuple[str, ...] | None]:
    """Infer a column type from its header, falling back to the sample values."""
    lowered = header.strip().lower()
    words = set(_WORD_PATTERN.findall(lowered))
    values = [text for text in (_as_text(value) for value in sample_values) if text]

    if "date" in lowered or "time" in lowered:
        return CustomColumnType.DATE, None
    if "count" in lowered or "number" in lowered or "id" in words:
        # identifier columns such as "TC-001" stay text
        if all(_NUMBER_PATTERN.match(value) for value in values):
            return CustomColumnType.NUMBER, None
        return CustomColumnType.TEXT, None
    if "enabled" in lowered or "active" in lowered:
        return CustomColumnType.SELECT, BOOLEAN_OPTIONS
    if "status" in lowered:
        return CustomColumnType.SELECT, _distinct_options(values) or BOOLEAN_OPTIONS
    return _infer_from_values(values)


def column_slug(header: str) -> str:
    """Snake-case column name derived from a header."""
    slug = _SLUG_PATTERN.sub("_", header.strip().lower()).strip("_")
    return slug or "custom_column"


def _infer_from_values(values: Sequence[str]) -> tuple[CustomColumnType, tuple[str, ...] | None]:
    if not values:
        return CustomColumnType.TEXT, None
    if all(_NUMBER_PATTERN.match(value) for value in values):
        return CustomColumnType.NUMBER, None
    if all(_DATE_PATTERN.match(value) for value in values):
        return CustomColumnType.DATE, None
    if len(values) >= MIN_SELECT_SAMPLES:
        options = _distinct_options(values)
        if options and len(options) < len(values):
            return CustomColumnType.SELECT, options
    return CustomColumnType.TEXT, None


def _distinct_options(values: Sequence[str]) -> tuple[str, ...] | None:
    options: list[str] = []
    seen: set[str] = set()
    for value in values:
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        options.append(value)
        if len(options) > MAX_SELECT_OPTIONS:
            return None
    return tuple(options) or None


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _unique(name: str, used: set[str]) -> str:
    candidate = name
    suffix = 2
    while candidate in used:
        candidate = f"{name}_{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate
