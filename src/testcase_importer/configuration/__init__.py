"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_SETTINGS_FILENAME,
    build_placeholder_settings,
    write_placeholder_settings,
)
from .loader import SettingsError, load_settings, parse_settings
from .runtime_settings import ImportSettings

__all__ = [
    "ImportSettings",
    "SettingsError",
    "load_settings",
    "parse_settings",
    "DEFAULT_SETTINGS_FILENAME",
    "build_placeholder_settings",
    "write_placeholder_settings",
]
