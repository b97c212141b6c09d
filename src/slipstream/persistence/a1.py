"""A1-notation helpers shared by the Sheets and in-memory stores."""

from __future__ import annotations

import re

_CELL = re.compile(r"^([A-Z]+)(\d+)$")


def column_letter(index: int) -> str:
    """Zero-based column index to letters: 0 -> A, 25 -> Z, 26 -> AA."""
    if index < 0:
        raise ValueError(f"column index must be >= 0, got {index}")
    letters = ""
    while index >= 0:
        index, rem = divmod(index, 26)
        letters = chr(65 + rem) + letters
        index -= 1
    return letters


def column_index(letters: str) -> int:
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - 64)
    return index - 1


def cell_range(sheet: str, col: int, row: int) -> str:
    """``cell_range("Monthly_Attendance", 7, 3)`` -> ``Monthly_Attendance!H3`` (row is 1-based)."""
    return f"{sheet}!{column_letter(col)}{row}"


def split_range(range_name: str) -> tuple[str, str]:
    """Split ``Sheet!A1`` into ``("Sheet", "A1")``; a bare sheet name gives ``(name, "")``."""
    sheet, _, cell = range_name.partition("!")
    return sheet.strip("'"), cell


def parse_cell(cell: str) -> tuple[int, int]:
    """``H3`` -> ``(7, 2)``: zero-based column and row."""
    match = _CELL.match(cell.upper())
    if match is None:
        raise ValueError(f"Unsupported cell reference {cell!r}")
    return column_index(match.group(1)), int(match.group(2)) - 1
