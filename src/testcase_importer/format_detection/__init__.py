"""Format detection exports."""

from .delimited_tokenizer import (
    COMMA,
    TAB,
    count_delimiters,
    normalize_headers,
    split_cells,
    split_delimited,
)
from .detection_models import DelimitedTable, DetectedFormat, ImportFormat
from .format_detector import detect
from .keyed_lines import KNOWN_LABELS, parse_keyed_line

__all__ = [
    "COMMA",
    "TAB",
    "DelimitedTable",
    "DetectedFormat",
    "ImportFormat",
    "KNOWN_LABELS",
    "count_delimiters",
    "detect",
    "normalize_headers",
    "parse_keyed_line",
    "split_cells",
    "split_delimited",
]
