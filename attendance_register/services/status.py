from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from enum import Enum

from ..excel.cells import cell_text
from ..models.attendance_record import AttendanceRecord

"""Status normalization and per-date status counts."""

__all__ = [
    "StatusCategory",
    "normalize_status",
    "summary_by_date",
]


class StatusCategory(Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    WEEKOFF = "WEEKOFF"
    HOLIDAY = "HOLIDAY"
    OTHER = "OTHER"


_STATUS_CODES = {
    "P": StatusCategory.PRESENT,
    "PRESENT": StatusCategory.PRESENT,
    "A": StatusCategory.ABSENT,
    "ABSENT": StatusCategory.ABSENT,
    "WO": StatusCategory.WEEKOFF,
    "W/O": StatusCategory.WEEKOFF,
    "WEEKOFF": StatusCategory.WEEKOFF,
    "WEEK OFF": StatusCategory.WEEKOFF,
    "H": StatusCategory.HOLIDAY,
    "HOLIDAY": StatusCategory.HOLIDAY,
}


def normalize_status(status: str | None) -> StatusCategory:
    """Map a raw status code to its category (unknown or empty -> OTHER)."""
    return _STATUS_CODES.get(cell_text(status).upper(), StatusCategory.OTHER)


def summary_by_date(
    records: Iterable[AttendanceRecord], dates: Sequence[date]
) -> dict[date, dict[StatusCategory, int]]:
    """Count records per status category for each of ``dates``.

    Records on dates outside ``dates`` are ignored.
    """
    out: dict[date, dict[StatusCategory, int]] = {
        d: {cat: 0 for cat in StatusCategory} for d in dates
    }
    for rec in records:
        counts = out.get(rec.date)
        if counts is None:
            continue
        counts[normalize_status(rec.status)] += 1
    return out
