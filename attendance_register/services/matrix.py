from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from ..models.attendance_record import AttendanceRecord
from ..models.employee_row import UNKNOWN, DayCell, EmployeeMeta, EmployeeRow
from .status import StatusCategory, normalize_status

"""Matrix projector.

Reshapes flat attendance records into one row per employee and one column per
date (ascending), and back. Metadata (department, designation, canonical
name) is an optional overlay keyed by employee id; missing metadata renders as
``UNKNOWN`` and is never an error.
"""

__all__ = [
    "date_columns",
    "project",
    "flatten",
    "filter_rows",
    "sort_rows",
]

_NUM_SPLIT_RE = re.compile(r"(\d+)")


def date_columns(records: Iterable[AttendanceRecord]) -> list[date]:
    return sorted({r.date for r in records})


def project(
    records: Sequence[AttendanceRecord],
    meta: Mapping[str, EmployeeMeta] | None = None,
) -> tuple[list[EmployeeRow], list[date]]:
    """Build display rows (first-seen order) and the sorted date columns.

    Records without card or payroll number have no employee id and are skipped.
    A later record for the same (employee, date) replaces an earlier one.
    """
    meta = meta or {}
    rows: dict[str, EmployeeRow] = {}
    for rec in records:
        emp_id = rec.identity.employee_id
        if not emp_id:
            continue
        row = rows.get(emp_id)
        if row is None:
            m = meta.get(emp_id)
            row = EmployeeRow(
                employee_id=emp_id,
                name=(m.name if m else None) or rec.identity.name or UNKNOWN,
                identity=rec.identity,
                department=(m.dept if m else None) or UNKNOWN,
                designation=(m.designation if m else None) or UNKNOWN,
            )
            rows[emp_id] = row
        elif row.name == UNKNOWN and rec.identity.name:
            row.name = rec.identity.name
        row.by_date[rec.date] = DayCell(
            in_time=rec.in_time,
            out_time=rec.out_time,
            status=rec.status,
            identity=rec.identity,
        )
    return list(rows.values()), date_columns(records)


def flatten(rows: Iterable[EmployeeRow]) -> list[AttendanceRecord]:
    """Inverse of ``project``: one record per non-empty cell, dates ascending per row.

    Each record keeps the identity it was projected from; cells built by hand
    (no identity) fall back to the row identity.
    """
    out: list[AttendanceRecord] = []
    for row in rows:
        for d in sorted(row.by_date):
            cell = row.by_date[d]
            if cell.is_empty:
                continue
            out.append(
                AttendanceRecord(
                    identity=cell.identity or row.identity,
                    date=d,
                    in_time=cell.in_time,
                    out_time=cell.out_time,
                    status=cell.status,
                )
            )
    return out


def _has_status(row: EmployeeRow, dates: Sequence[date], status: StatusCategory) -> bool:
    for d in dates:
        cell = row.by_date.get(d)
        if cell is not None and normalize_status(cell.status) is status:
            return True
    return False


def filter_rows(
    rows: Iterable[EmployeeRow],
    dates: Sequence[date],
    *,
    search: str = "",
    status: StatusCategory | None = None,
) -> list[EmployeeRow]:
    """Filter by free-text search and by "has at least one day with status"."""
    q = search.strip().lower()
    out: list[EmployeeRow] = []
    for row in rows:
        if q and not any(
            q in field.lower()
            for field in (row.employee_id, row.name, row.department, row.designation)
        ):
            continue
        if status is not None and not _has_status(row, dates, status):
            continue
        out.append(row)
    return out


def _natural_key(text: str) -> list[object]:
    # "E10" > "E9"; 大文字小文字は区別しない
    return [int(p) if i % 2 else p.lower() for i, p in enumerate(_NUM_SPLIT_RE.split(text))]


def sort_rows(rows: Iterable[EmployeeRow], key: str = "empId", *, descending: bool = False) -> list[EmployeeRow]:
    """Sort by ``empId`` or ``name`` in natural order.

    Raises:
        ValueError: unknown sort key
    """
    if key == "empId":
        return sorted(rows, key=lambda r: _natural_key(r.employee_id), reverse=descending)
    if key == "name":
        return sorted(rows, key=lambda r: _natural_key(r.name), reverse=descending)
    raise ValueError(f"unknown sort key: {key}")
