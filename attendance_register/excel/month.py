from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ..models.month_year import MonthYear
from .cells import cell_text
from .errors import MonthYearNotFoundError

"""Month resolver.

Order: an in-sheet ``from DD/MM/YYYY to DD/MM/YYYY`` line, then a
``D.M.YYYY`` token in the file name. First success wins.
"""

__all__ = [
    "month_year_from_sheet",
    "month_year_from_filename",
    "resolve_month_year",
]

_RANGE_RE = re.compile(
    r"from\s+(\d{1,2})/(\d{1,2})/(\d{4})\s+to\s+(\d{1,2})/(\d{1,2})/(\d{4})",
    re.IGNORECASE,
)
_FILENAME_RE = re.compile(r"(\d{1,2})[.\-/](\d{1,2})[.\-/](\d{4})")


def _month_year(month: str, year: str) -> MonthYear | None:
    m, y = int(month), int(year)
    if not 1 <= m <= 12 or y <= 0:
        return None
    return MonthYear(year=y, month=m)


def month_year_from_sheet(matrix: Sequence[Sequence[Any] | None]) -> MonthYear | None:
    """Month/year of the first date-range line found anywhere in the sheet."""
    for row in matrix:
        for value in row or []:
            text = cell_text(value)
            if not text:
                continue
            m = _RANGE_RE.search(text)
            if m is None:
                continue
            my = _month_year(m.group(2), m.group(3))
            if my is not None:
                return my
    return None


def month_year_from_filename(name: str) -> MonthYear | None:
    m = _FILENAME_RE.search(name)
    if m is None:
        return None
    return _month_year(m.group(2), m.group(3))


def resolve_month_year(matrix: Sequence[Sequence[Any] | None], file_name: str) -> MonthYear:
    """Resolve the reporting month.

    Raises:
        MonthYearNotFoundError: neither the sheet nor the file name yields a month
    """
    my = month_year_from_sheet(matrix) or month_year_from_filename(file_name)
    if my is None:
        raise MonthYearNotFoundError()
    return my
