"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_INPUT_CHARS = 1_000_000
DEFAULT_MAX_ROWS = 5000
DEFAULT_MAX_DESCRIPTION_LENGTH = 1000
DEFAULT_FREEFORM_CONFIDENCE = 0.3
DEFAULT_DETECTION_SAMPLE_LINES = 5


@dataclass(frozen=True)
class ImportSettings:
    """Limits and tuning knobs applied to one import run."""

    max_input_chars: int = DEFAULT_MAX_INPUT_CHARS
    max_rows: int = DEFAULT_MAX_ROWS
    max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH
    freeform_confidence: float = DEFAULT_FREEFORM_CONFIDENCE
    detection_sample_lines: int = DEFAULT_DETECTION_SAMPLE_LINES
