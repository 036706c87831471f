"""Format detection entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class ImportFormat(str, Enum):
    """Structural classes recognised in pasted or uploaded input."""

    CSV = "csv"
    TSV = "tsv"
    STRUCTURED = "structured"
    HIERARCHICAL = "hierarchical"
    FREEFORM = "freeform"

    @property
    def is_delimited(self) -> bool:
        """Return True for table formats that carry a header row."""
        return self in (ImportFormat.CSV, ImportFormat.TSV)


@dataclass(frozen=True)
class DetectedFormat:
    """Classification of one input text."""

    format: ImportFormat
    confidence: float
    headers: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", min(1.0, max(0.0, float(self.confidence))))


@dataclass(frozen=True)
class DelimitedTable:
    """Header row and data rows split out of delimited text."""

    delimiter: str
    headers: tuple[str, ...]
    rows: tuple[Mapping[str, str], ...]
    warnings: tuple[str, ...] = field(default=())
