"""Column mapping exports."""

from .custom_column_proposals import column_slug, infer_column_type, propose_custom_columns
from .mapping_models import (
    SKIP,
    ColumnMapping,
    ColumnMatch,
    ConfidenceTier,
    CustomColumnProposal,
    CustomColumnType,
    FieldName,
)
from .mapping_rules import (
    MAPPING_RULES,
    UnknownFieldError,
    map_column,
    map_headers,
    normalize_header,
    resolve_field_name,
)

__all__ = [
    "SKIP",
    "MAPPING_RULES",
    "ColumnMapping",
    "ColumnMatch",
    "ConfidenceTier",
    "CustomColumnProposal",
    "CustomColumnType",
    "FieldName",
    "UnknownFieldError",
    "column_slug",
    "infer_column_type",
    "map_column",
    "map_headers",
    "normalize_header",
    "propose_custom_columns",
    "resolve_field_name",
]
