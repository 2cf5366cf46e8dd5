from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .cells import cell_text, is_day_number

"""Day header row locator.

Exports have no fixed header position, so the header is the first row where
enough cells look like day-of-month numbers.
"""

__all__ = [
    "MAX_SCAN_ROWS",
    "MAX_SCAN_COLUMN",
    "MIN_DAY_CELLS",
    "find_day_header_row",
    "day_columns",
]

MAX_SCAN_ROWS = 250
MAX_SCAN_COLUMN = 44  # inclusive; column 0 holds labels
MIN_DAY_CELLS = 10


def _count_day_cells(row: Sequence[Any]) -> int:
    upper = min(len(row), MAX_SCAN_COLUMN + 1)
    return sum(1 for c in range(1, upper) if is_day_number(row[c]))


def find_day_header_row(matrix: Sequence[Sequence[Any] | None]) -> int:
    """Return the index of the first row with >= MIN_DAY_CELLS day cells, or -1."""
    for r in range(min(len(matrix), MAX_SCAN_ROWS)):
        row = matrix[r] or []
        if _count_day_cells(row) >= MIN_DAY_CELLS:
            return r
    return -1


def day_columns(header_row: Sequence[Any]) -> list[tuple[int, int]]:
    """List (column, day) pairs for every day cell right of column 0."""
    return [
        (c, int(cell_text(header_row[c])))
        for c in range(1, len(header_row))
        if is_day_number(header_row[c])
    ]
