"""Settings loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_DETECTION_SAMPLE_LINES,
    DEFAULT_FREEFORM_CONFIDENCE,
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MAX_INPUT_CHARS,
    DEFAULT_MAX_ROWS,
    ImportSettings,
)

_KNOWN_KEYS = frozenset(
    {
        "max_input_chars",
        "max_rows",
        "max_description_length",
        "freeform_confidence",
        "detection_sample_lines",
    }
)


class SettingsError(Exception):
    """Raised when the settings file is invalid."""


def load_settings(settings_path: Path | str) -> ImportSettings:
    """Load and validate the import settings file."""
    path = Path(settings_path)
    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file: {exc}") from exc

    if parsed is None:
        return ImportSettings()

    if not isinstance(parsed, Mapping):
        raise SettingsError("Settings root must be a mapping.")

    return parse_settings(parsed.get("import"))


def parse_settings(value: Any) -> ImportSettings:
    """Build settings from an already parsed ``import`` section."""
    section = _require_mapping(value, "import")
    unknown = sorted(str(key) for key in section if key not in _KNOWN_KEYS)
    if unknown:
        raise SettingsError(f"Unknown import settings: {', '.join(unknown)}")

    return ImportSettings(
        max_input_chars=_require_positive_int(
            section.get("max_input_chars", DEFAULT_MAX_INPUT_CHARS), "import.max_input_chars"
        ),
        max_rows=_require_positive_int(
            section.get("max_rows", DEFAULT_MAX_ROWS), "import.max_rows"
        ),
        max_description_length=_require_positive_int(
            section.get("max_description_length", DEFAULT_MAX_DESCRIPTION_LENGTH),
            "import.max_description_length",
        ),
        freeform_confidence=_require_ratio(
            section.get("freeform_confidence", DEFAULT_FREEFORM_CONFIDENCE),
            "import.freeform_confidence",
        ),
        detection_sample_lines=_require_positive_int(
            section.get("detection_sample_lines", DEFAULT_DETECTION_SAMPLE_LINES),
            "import.detection_sample_lines",
        ),
    )


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SettingsError(f"Settings section '{section_name}' is required.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise SettingsError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise SettingsError(f"{field_name} must be an integer.")
    if value <= 0:
        raise SettingsError(f"{field_name} must be greater than zero.")
    return value


def _require_ratio(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SettingsError(f"{field_name} must be a number.")
    if not 0 <= value <= 1:
        raise SettingsError(f"{field_name} must be between 0 and 1.")
    return float(value)
