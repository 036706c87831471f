"""Input format classification service."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from testcase_importer.configuration.runtime_settings import (
    DEFAULT_DETECTION_SAMPLE_LINES,
    DEFAULT_FREEFORM_CONFIDENCE,
)

from .delimited_tokenizer import COMMA, TAB, count_delimiters, normalize_headers, split_cells
from .detection_models import DetectedFormat, ImportFormat
from .keyed_lines import KNOWN_LABELS, parse_keyed_line

TOP_LEVEL_HEADER_PATTERN = re.compile(r"^\d+\.\s+[A-Z]")
SUBSECTION_HEADER_PATTERN = re.compile(r"^\d+\.\d+\.?\s")
TEST_CASE_MARKER_PATTERN = re.compile(r"^[A-Za-z]{1,4}-?\d+[:.]")

_HIERARCHICAL_BASE_CONFIDENCE = 0.85
_HIERARCHICAL_PER_MARKER = 0.05
_HIERARCHICAL_MAX_CONFIDENCE = 0.95
_MIN_DELIMITER_CONSISTENCY = 0.6
_STRUCTURED_MAX_CONFIDENCE = 0.85
_MIN_STRUCTURED_KEYS = 2
# tabs first: spreadsheet pastes often carry commas inside cells
_DELIMITERS = (
    (TAB, ImportFormat.TSV, 0.45),
    (COMMA, ImportFormat.CSV, 0.4),
)

_LOGGER = logging.getLogger(__name__)


def detect(
    text: str,
    *,
    sample_lines: int = DEFAULT_DETECTION_SAMPLE_LINES,
    freeform_confidence: float = DEFAULT_FREEFORM_CONFIDENCE,
) -> DetectedFormat:
    """Classify raw text, checking outline, delimited and keyed structure in that order."""
    lines = [line.rstrip("\r") for line in text.splitlines() if line.strip()]
    if not lines:
        return DetectedFormat(format=ImportFormat.FREEFORM, confidence=0.0)

    stripped = [line.strip() for line in lines]
    for candidate in (
        _detect_hierarchical(stripped),
        _detect_delimited(lines, sample_lines),
        _detect_structured(stripped),
    ):
        if candidate is not None:
            _LOGGER.debug(
                "Detected %s input (confidence %.2f)",
                candidate.format.value,
                candidate.confidence,
            )
            return candidate

    _LOGGER.debug("No structure recognised; treating input as freeform")
    return DetectedFormat(format=ImportFormat.FREEFORM, confidence=freeform_confidence)


def _detect_hierarchical(lines: Sequence[str]) -> DetectedFormat | None:
    has_section = any(TOP_LEVEL_HEADER_PATTERN.match(line) for line in lines)
    has_subsection = any(SUBSECTION_HEADER_PATTERN.match(line) for line in lines)
    marker_count = sum(1 for line in lines if TEST_CASE_MARKER_PATTERN.match(line))
    if not (has_section and has_subsection and marker_count):
        return None
    confidence = min(
        _HIERARCHICAL_MAX_CONFIDENCE,
        _HIERARCHICAL_BASE_CONFIDENCE + _HIERARCHICAL_PER_MARKER * marker_count,
    )
    return DetectedFormat(format=ImportFormat.HIERARCHICAL, confidence=confidence)


def _detect_delimited(lines: Sequence[str], sample_lines: int) -> DetectedFormat | None:
    if len(lines) < 2:
        return _detect_header_only(lines[0])
    sample = lines[: min(sample_lines, len(lines))]
    for delimiter, import_format, weight in _DELIMITERS:
        header_count = count_delimiters(sample[0], delimiter)
        if header_count < 1:
            continue
        consistent = sum(1 for line in sample if _is_consistent(line, delimiter, header_count))
        ratio = consistent / len(sample)
        if ratio < _MIN_DELIMITER_CONSISTENCY:
            continue
        headers = normalize_headers(split_cells(sample[0], delimiter))
        return DetectedFormat(
            format=import_format, confidence=0.5 + weight * ratio, headers=headers
        )
    return None


def _is_consistent(line: str, delimiter: str, header_count: int) -> bool:
    count = count_delimiters(line, delimiter)
    return count >= 1 and abs(count - header_count) <= 1


def _detect_header_only(line: str) -> DetectedFormat | None:
    # a lone line is a table header only when every cell is a known field label
    for delimiter, import_format, weight in _DELIMITERS:
        if count_delimiters(line, delimiter) < 1:
            continue
        cells = [" ".join(cell.lower().split()) for cell in split_cells(line, delimiter)]
        if all(cell in KNOWN_LABELS for cell in cells):
            headers = normalize_headers(split_cells(line, delimiter))
            return DetectedFormat(format=import_format, confidence=0.5 + weight, headers=headers)
    return None


def _detect_structured(lines: Sequence[str]) -> DetectedFormat | None:
    keyed = [parse_keyed_line(line) for line in lines]
    labels = {match[0] for match in keyed if match is not None}
    if len(labels) < _MIN_STRUCTURED_KEYS:
        return None
    fraction = sum(1 for match in keyed if match is not None) / len(lines)
    confidence = min(_STRUCTURED_MAX_CONFIDENCE, 0.4 + 0.5 * fraction)
    return DetectedFormat(format=ImportFormat.STRUCTURED, confidence=confidence)
