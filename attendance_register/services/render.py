from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date

import pandas as pd

from ..models.employee_row import DayCell, EmployeeRow
from .status import StatusCategory

"""Text rendering of the register grid and the per-date status summary."""

__all__ = [
    "PLACEHOLDER",
    "format_header_date",
    "weekday_label",
    "format_cell",
    "grid_frame",
    "render_grid",
    "render_status_summary",
]

PLACEHOLDER = "—"

_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def format_header_date(d: date) -> str:
    """``DD-MM-YYYY``."""
    return d.strftime("%d-%m-%Y")


def weekday_label(d: date) -> str:
    return _WEEKDAYS[d.weekday()]


def format_cell(cell: DayCell | None) -> str:
    if cell is None or cell.is_empty:
        return PLACEHOLDER
    if not (cell.in_time or cell.out_time):
        return cell.status
    times = f"{cell.in_time or PLACEHOLDER}-{cell.out_time or PLACEHOLDER}"
    return f"{times} {cell.status}".rstrip()


def _date_column(d: date) -> str:
    return f"{format_header_date(d)} {weekday_label(d)[:3]}"


def grid_frame(rows: Sequence[EmployeeRow], dates: Sequence[date]) -> pd.DataFrame:
    """Grid as a DataFrame: identity columns, then one column per date."""
    data = []
    for row in rows:
        item = {
            "Emp ID": row.employee_id,
            "Name": row.name,
            "Dept": row.department,
            "Designation": row.designation,
        }
        for d in dates:
            item[_date_column(d)] = format_cell(row.cell(d))
        data.append(item)
    columns = ["Emp ID", "Name", "Dept", "Designation"] + [_date_column(d) for d in dates]
    return pd.DataFrame(data, columns=columns)


def render_grid(rows: Sequence[EmployeeRow], dates: Sequence[date]) -> str:
    if not rows:
        return "(no employees)"
    return grid_frame(rows, dates).to_string(index=False)


def render_status_summary(summary: Mapping[date, Mapping[StatusCategory, int]]) -> str:
    """One line per date: ``DD-MM-YYYY Weekday PRESENT=n ABSENT=n ...``."""
    lines = []
    for d in sorted(summary):
        counts = " ".join(f"{cat.value}={summary[d].get(cat, 0)}" for cat in StatusCategory)
        lines.append(f"{format_header_date(d)} {weekday_label(d)} {counts}")
    return "\n".join(lines)
