"""Hierarchical outline parsing exports."""

from .outline_models import (
    HierarchicalDocument,
    HierarchicalTestCase,
    LineKind,
    OutlineState,
    Section,
    Subsection,
)
from .outline_parser import (
    OutlineParseError,
    classify_line,
    parse_id_list,
    parse_outline,
    transition,
)

__all__ = [
    "HierarchicalDocument",
    "HierarchicalTestCase",
    "LineKind",
    "OutlineParseError",
    "OutlineState",
    "Section",
    "Subsection",
    "classify_line",
    "parse_id_list",
    "parse_outline",
    "transition",
]
