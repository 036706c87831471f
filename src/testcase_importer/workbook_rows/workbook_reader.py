"""Spreadsheet row ingestion service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from testcase_importer.format_detection import normalize_headers

_LOGGER = logging.getLogger(__name__)


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be turned into import rows."""


@dataclass(frozen=True)
class WorkbookRows:
    """Header row and data rows of one worksheet."""

    sheet_name: str
    headers: tuple[str, ...]
    rows: tuple[Mapping[str, object], ...]


def read_workbook_rows(workbook_path: Path | str, sheet_name: str | None = None) -> WorkbookRows:
    """Read one sheet and return its rows keyed by the first non-empty row."""
    path = Path(workbook_path)
    if not path.exists():
        raise WorkbookReadError(f"Workbook file not found: {path}")

    try:
        workbook = load_workbook(path, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError) as exc:
        raise WorkbookReadError(f"Unable to open workbook {path}: {exc}") from exc

    if sheet_name is not None:
        if sheet_name not in workbook.sheetnames:
            raise WorkbookReadError(f"Worksheet '{sheet_name}' not found in {path}.")
        sheet = workbook[sheet_name]
    else:
        sheet = workbook.worksheets[0] if workbook.worksheets else None
    if sheet is None:
        raise WorkbookReadError("Workbook has no worksheet.")
    assert isinstance(sheet, Worksheet)

    headers, rows = _collect_rows(sheet)
    if not headers:
        raise WorkbookReadError(f"Worksheet '{sheet.title}' is empty.")
    _LOGGER.debug("Read %d rows from worksheet '%s'", len(rows), sheet.title)
    return WorkbookRows(sheet_name=sheet.title, headers=headers, rows=tuple(rows))


def _collect_rows(sheet: Worksheet) -> tuple[tuple[str, ...], list[dict[str, object]]]:
    headers: tuple[str, ...] = ()
    rows: list[dict[str, object]] = []
    for values in sheet.iter_rows(values_only=True):
        if _row_is_empty(values):
            continue
        if not headers:
            headers = normalize_headers(values[: _used_width(values)])
            continue
        cells = list(values[: len(headers)])
        cells.extend([None] * (len(headers) - len(cells)))
        rows.append(dict(zip(headers, cells)))
    return headers, rows


def _used_width(values: Sequence[object]) -> int:
    width = len(values)
    while width and _is_empty(values[width - 1]):
        width -= 1
    return width


def _row_is_empty(values: Sequence[object]) -> bool:
    return all(_is_empty(value) for value in values)


def _is_empty(value: object) -> bool:
    return value is None or str(value).strip() == ""
