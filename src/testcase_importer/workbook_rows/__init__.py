"""Workbook row ingestion exports."""

from .workbook_reader import WorkbookReadError, WorkbookRows, read_workbook_rows

__all__ = ["WorkbookReadError", "WorkbookRows", "read_workbook_rows"]
