"""Quote-aware splitting of comma and tab separated text."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence

from .detection_models import DelimitedTable

TAB = "\t"
COMMA = ","

_LOGGER = logging.getLogger(__name__)


def split_cells(line: str, delimiter: str) -> list[str]:
    """Split one physical line into cells, keeping delimiters inside double quotes."""
    try:
        return next(csv.reader([line], delimiter=delimiter), [])
    except csv.Error:
        return line.split(delimiter)


def count_delimiters(line: str, delimiter: str) -> int:
    """Count delimiters outside quoted cells."""
    if delimiter not in line:
        return 0
    return max(len(split_cells(line, delimiter)) - 1, 0)


def split_delimited(text: str, delimiter: str) -> DelimitedTable:
    """Split delimited text into a header row and keyed data rows.

    Quoted cells may contain the delimiter, escaped quotes and line breaks.
    Blank records are skipped. Short rows are padded with empty strings and
    surplus cells are dropped with a warning.
    """
    records, warnings = _read_records(text, delimiter)
    if not records:
        return DelimitedTable(delimiter=delimiter, headers=(), rows=(), warnings=tuple(warnings))

    headers = normalize_headers(records[0])
    rows: list[dict[str, str]] = []
    for row_number, record in enumerate(records[1:], start=2):
        cells = [cell.strip() for cell in record]
        if len(cells) > len(headers):
            surplus = [cell for cell in cells[len(headers) :] if cell]
            if surplus:
                warnings.append(
                    f"Row {row_number}: {len(surplus)} cell(s) beyond the header row were ignored."
                )
            cells = cells[: len(headers)]
        cells.extend([""] * (len(headers) - len(cells)))
        rows.append(dict(zip(headers, cells, strict=True)))

    return DelimitedTable(
        delimiter=delimiter,
        headers=headers,
        rows=tuple(rows),
        warnings=tuple(warnings),
    )


def normalize_headers(raw_headers: Sequence[object]) -> tuple[str, ...]:
    """Trim headers, name blank ones and make duplicates unique."""
    headers: list[str] = []
    seen: dict[str, int] = {}
    for index, raw in enumerate(raw_headers, start=1):
        header = "" if raw is None else str(raw).strip().strip('"').strip()
        if not header:
            header = f"Column_{index}"
        key = header.lower()
        if key in seen:
            suffix = seen[key] + 1
            while f"{key}_{suffix}" in seen:
                suffix += 1
            seen[key] = suffix
            header = f"{header}_{suffix}"
        seen.setdefault(header.lower(), 1)
        headers.append(header)
    return tuple(headers)


def _read_records(text: str, delimiter: str) -> tuple[list[list[str]], list[str]]:
    records: list[list[str]] = []
    warnings: list[str] = []
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            _LOGGER.warning("Delimited input stopped at line %s: %s", reader.line_num, exc)
            warnings.append(f"Line {reader.line_num}: stopped reading delimited data ({exc}).")
            break
        if any(cell.strip() for cell in record):
            records.append(record)
    return records, warnings
