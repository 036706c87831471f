"""Delimited text splitting tests."""

from __future__ import annotations

from testcase_importer.format_detection import (
    COMMA,
    TAB,
    count_delimiters,
    normalize_headers,
    split_cells,
    split_delimited,
)


def test_split_cells_keeps_quoted_delimiters() -> None:
    assert split_cells('a,"b, c",d', COMMA) == ["a", "b, c", "d"]
    assert count_delimiters('a,"b, c",d', COMMA) == 2


def test_count_delimiters_without_delimiter_is_zero() -> None:
    assert count_delimiters("no delimiters here", TAB) == 0


def test_split_delimited_reads_quoted_line_breaks_and_escaped_quotes() -> None:
    text = 'Title,Steps\nLogin,"1. Open page\n2. Say ""hello"""\n'

    table = split_delimited(text, COMMA)

    assert table.headers == ("Title", "Steps")
    assert table.rows == ({"Title": "Login", "Steps": '1. Open page\n2. Say "hello"'},)
    assert table.warnings == ()


def test_split_delimited_pads_short_rows_and_drops_surplus_cells() -> None:
    text = "Title\tPriority\nShort\nLong\tHigh\textra\n"

    table = split_delimited(text, TAB)

    assert table.rows == (
        {"Title": "Short", "Priority": ""},
        {"Title": "Long", "Priority": "High"},
    )
    assert table.warnings == ("Row 3: 1 cell(s) beyond the header row were ignored.",)


def test_split_delimited_skips_blank_records() -> None:
    table = split_delimited("Title,Priority\n\n,\nLogin,High\n", COMMA)

    assert table.rows == ({"Title": "Login", "Priority": "High"},)


def test_split_delimited_of_empty_text_has_no_headers() -> None:
    table = split_delimited("", COMMA)

    assert table.headers == ()
    assert table.rows == ()


def test_normalize_headers_names_blank_and_duplicate_headers() -> None:
    assert normalize_headers(["Title", "", "Notes", "notes", " Notes ", None]) == (
        "Title",
        "Column_2",
        "Notes",
        "notes_2",
        "Notes_3",
        "Column_6",
    )
