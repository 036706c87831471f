"""Settings scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_SETTINGS_FILENAME = "import-settings.yaml"

_SETTINGS_SCAFFOLD_TEMPLATE = """# Import settings for testcase-importer.
# Every key is optional; remove a line to fall back to the built-in default.

import:
  # Pasted text beyond this many characters is truncated before detection.
  max_input_chars: 1000000
  # Data rows beyond this count are dropped with a warning.
  max_rows: 5000
  # Longer descriptions are reported as validation errors.
  max_description_length: 1000
  # Confidence reported for input that matches no known structure (0..1).
  freeform_confidence: 0.3
  # Number of leading lines inspected when checking delimiter consistency.
  detection_sample_lines: 5
"""


def build_placeholder_settings() -> str:
    """Build a YAML settings template with the default values and inline guidance."""
    return _SETTINGS_SCAFFOLD_TEMPLATE


def write_placeholder_settings(output_path: Path | str) -> Path:
    """Write the settings template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Settings file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_settings(), encoding="utf-8")
    return destination.resolve()
