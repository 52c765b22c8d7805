"""
csse_ingest/parsing/delimited.py

Delimited-text reading for downloaded report files.
"""

from __future__ import annotations

import csv
import io

_UTF8_BOM = "\ufeff"


class DelimitedTextError(ValueError):
    """
    Raised when report content cannot be read as consistent delimited rows.
    """

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


def parse_delimited(
    text: str,
    *,
    delimiter: str = ",",
    skip_header: bool = True,
    strict: bool = True,
) -> list[list[str]]:
    """
    Split raw text into rows of string cells.

    Blank lines are ignored. With `strict`, every row must have the same
    number of cells as the first (header) row; a mismatch is treated as a
    structural failure of the whole document.
    """

    if text.startswith(_UTF8_BOM):
        text = text[len(_UTF8_BOM):]

    rows: list[list[str]] = []
    expected_width: int | None = None
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    try:
        for row in reader:
            if not row:
                continue
            if expected_width is None:
                expected_width = len(row)
                if skip_header:
                    continue
            elif strict and len(row) != expected_width:
                raise DelimitedTextError(
                    f"Row has {len(row)} fields, expected {expected_width} "
                    f"(line {reader.line_num}).",
                    line_number=reader.line_num,
                )
            rows.append(row)
    except csv.Error as exc:
        raise DelimitedTextError(
            f"Invalid delimited format: {exc}",
            line_number=reader.line_num,
        ) from exc

    return rows
