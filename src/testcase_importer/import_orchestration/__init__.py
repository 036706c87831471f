"""Import orchestration exports."""

from .import_contracts import ImportContext, ImportResult, RawInput
from .import_use_case import run
from .text_extraction import extract_freeform, extract_structured_blocks

__all__ = [
    "ImportContext",
    "ImportResult",
    "RawInput",
    "extract_freeform",
    "extract_structured_blocks",
    "run",
]
