"""Header to canonical field mapping service."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence

from .mapping_models import (
    OVERRIDE_SCORE,
    SKIP,
    SKIP_SCORE,
    TIER_SCORES,
    ColumnMapping,
    ColumnMatch,
    ConfidenceTier,
    FieldName,
)

HeaderPredicate = Callable[[str], bool]

_SEPARATOR_PATTERN = re.compile(r"[\s_\-]+")
_WORD_PATTERN = re.compile(r"[a-z0-9]+")

_LOGGER = logging.getLogger(__name__)


class UnknownFieldError(ValueError):
    """Raised when a manual override names no canonical field."""


def normalize_header(header: str) -> str:
    """Lower-case the header and collapse separators to single spaces."""
    return _SEPARATOR_PATTERN.sub(" ", header.strip().lower()).strip()


def _equals(*values: str) -> HeaderPredicate:
    return lambda header: header in values


def _contains_any(*tokens: str) -> HeaderPredicate:
    return lambda header: any(token in header for token in tokens)


def _contains_all(*tokens: str) -> HeaderPredicate:
    return lambda header: all(token in header for token in tokens)


def _has_word(*words: str) -> HeaderPredicate:
    return lambda header: any(word in _WORD_PATTERN.findall(header) for word in words)


def _both(first: HeaderPredicate, second: HeaderPredicate) -> HeaderPredicate:
    return lambda header: first(header) and second(header)


def _either(first: HeaderPredicate, second: HeaderPredicate) -> HeaderPredicate:
    return lambda header: first(header) or second(header)


# Evaluated top to bottom; multi-token rules sit above the single-token rules
# that would otherwise claim the same header.
MAPPING_RULES: tuple[tuple[HeaderPredicate, FieldName, ConfidenceTier], ...] = (
    (
        _equals("title", "name", "test title", "test name", "test case title", "test case name"),
        FieldName.TITLE,
        ConfidenceTier.HIGH,
    ),
    (
        _both(_contains_any("test"), _contains_any("case", "id")),
        FieldName.TITLE,
        ConfidenceTier.HIGH,
    ),
    (_contains_any("description", "desc"), FieldName.DESCRIPTION, ConfidenceTier.HIGH),
    (_contains_all("expected", "result"), FieldName.EXPECTED_RESULT, ConfidenceTier.HIGH),
    (_contains_any("steps", "procedure"), FieldName.STEPS_TO_REPRODUCE, ConfidenceTier.HIGH),
    (_equals("status"), FieldName.STATUS, ConfidenceTier.HIGH),
    (_equals("priority"), FieldName.PRIORITY, ConfidenceTier.HIGH),
    (
        _contains_any("assigned", "tester", "owner"),
        FieldName.ASSIGNED_TESTER,
        ConfidenceTier.MEDIUM,
    ),
    (_contains_any("date", "execution"), FieldName.EXECUTION_DATE, ConfidenceTier.MEDIUM),
    (_contains_any("notes", "comments"), FieldName.NOTES, ConfidenceTier.MEDIUM),
    (_contains_any("actual", "result"), FieldName.ACTUAL_RESULT, ConfidenceTier.MEDIUM),
    (
        _either(_contains_any("environment"), _has_word("env")),
        FieldName.ENVIRONMENT,
        ConfidenceTier.MEDIUM,
    ),
    (
        _contains_any("prerequisite", "setup", "precondition"),
        FieldName.PREREQUISITES,
        ConfidenceTier.MEDIUM,
    ),
    (
        _either(_contains_any("platform"), _has_word("os")),
        FieldName.PLATFORM,
        ConfidenceTier.MEDIUM,
    ),
    (_contains_any("category", "type"), FieldName.CATEGORY, ConfidenceTier.LOW),
)


def map_column(header: str) -> ColumnMatch:
    """Match one header against the rule table; the first matching rule wins."""
    normalized = normalize_header(header)
    for rank, (predicate, field, tier) in enumerate(MAPPING_RULES):
        if predicate(normalized):
            return ColumnMatch(field=field, tier=tier, confidence=TIER_SCORES[tier], rank=rank)
    return ColumnMatch(field=None, tier=ConfidenceTier.LOW, confidence=SKIP_SCORE)


def map_headers(
    headers: Sequence[str],
    overrides: Mapping[str, FieldName | None] | None = None,
) -> tuple[ColumnMapping, ...]:
    """Map every header, applying manual overrides and resolving field collisions.

    Overrides are keyed by source header (case-insensitive); ``None`` forces
    the column to skip. When several headers claim one field the most
    specific match keeps it and the others become skipped columns.
    """
    override_by_header = {
        normalize_header(header): field for header, field in (overrides or {}).items()
    }
    matches: list[tuple[ColumnMatch, bool]] = []
    for header in headers:
        key = normalize_header(header)
        if key in override_by_header:
            field = override_by_header[key]
            override_match = ColumnMatch(
                field=field,
                tier=ConfidenceTier.HIGH,
                confidence=OVERRIDE_SCORE,
                rank=-1,
            )
            matches.append((override_match, True))
        else:
            matches.append((map_column(header), False))

    winners = _claim_fields([match for match, _ in matches])
    mappings: list[ColumnMapping] = []
    for index, (header, (match, is_override)) in enumerate(zip(headers, matches, strict=True)):
        if match.field is not None and winners.get(match.field) != index:
            _LOGGER.debug(
                "Column '%s' lost field %s to '%s'",
                header,
                match.field.value,
                headers[winners[match.field]],
            )
            mappings.append(
                ColumnMapping(
                    source_column=header,
                    target_field=None,
                    confidence_tier=ConfidenceTier.LOW,
                    confidence=SKIP_SCORE,
                )
            )
            continue
        mappings.append(
            ColumnMapping(
                source_column=header,
                target_field=match.field,
                confidence_tier=match.tier,
                confidence=match.confidence,
                is_override=is_override,
            )
        )
    return tuple(mappings)


def resolve_field_name(value: object) -> FieldName | None:
    """Resolve a user supplied field reference; ``skip`` resolves to None.

    Accepts enum members, camelCase values (``expectedResult``), snake_case
    attribute names (``expected_result``) and enum names, case-insensitively.
    """
    if isinstance(value, FieldName):
        return value
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() == SKIP:
        return None
    lowered = text.lower().replace(" ", "_")
    for field in FieldName:
        if lowered in (field.value.lower(), field.attribute, field.name.lower()):
            return field
    raise UnknownFieldError(f"Unknown test case field: '{text}'")


def _claim_fields(matches: Sequence[ColumnMatch]) -> dict[FieldName, int]:
    winners: dict[FieldName, int] = {}
    for index, match in enumerate(matches):
        if match.field is None:
            continue
        current = winners.get(match.field)
        if current is None or _outranks(match, matches[current]):
            winners[match.field] = index
    return winners


def _outranks(candidate: ColumnMatch, incumbent: ColumnMatch) -> bool:
    if candidate.confidence != incumbent.confidence:
        return candidate.confidence > incumbent.confidence
    return _rank(candidate) < _rank(incumbent)


def _rank(match: ColumnMatch) -> int:
    return len(MAPPING_RULES) if match.rank is None else match.rank
