from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, BinaryIO

from ..excel.blocks import EmployeeBlock, iter_employee_blocks
from ..excel.cells import SubRowKind
from ..excel.errors import HeaderNotFoundError, NoDayColumnsError, NoRecordsError
from ..excel.header import day_columns, find_day_header_row
from ..excel.month import resolve_month_year
from ..excel.reader import read_first_sheet
from ..models.attendance_record import AttendanceRecord, EmployeeIdentity
from ..models.month_year import MonthYear
from ..models.parsed_sheet import ParsedSheet

"""Record builder: day columns x employee blocks -> flat attendance records.

Time selection per day:
- in_time:  IN1, falling back to IN2
- out_time: OUT2, falling back to OUT1
- status:   STATUS
A day with all three empty yields no record ("no data", not "absent").
"""

__all__ = [
    "pick_in_time",
    "pick_out_time",
    "build_records",
    "parse_matrix",
    "parse_workbook",
]

logger = logging.getLogger(__name__)


def pick_in_time(in1: str, in2: str) -> str:
    return in1 or in2


def pick_out_time(out1: str, out2: str) -> str:
    # 2回目の退勤を優先
    return out2 or out1


def build_records(
    blocks: Sequence[EmployeeBlock],
    day_cols: Sequence[tuple[int, int]],
    month_year: MonthYear,
) -> list[AttendanceRecord]:
    """Cross day columns with employee blocks (block-major order)."""
    dates = []
    for col, day in day_cols:
        d = month_year.date_for(day)
        if d is None:
            logger.warning(f"day {day} does not exist in {month_year.label}; column {col} skipped")
            continue
        dates.append((col, d))

    records: list[AttendanceRecord] = []
    for block in blocks:
        if not block.sub_rows:
            continue
        for col, d in dates:
            rec = AttendanceRecord(
                identity=block.identity,
                date=d,
                in_time=pick_in_time(block.value(SubRowKind.IN1, col), block.value(SubRowKind.IN2, col)),
                out_time=pick_out_time(block.value(SubRowKind.OUT1, col), block.value(SubRowKind.OUT2, col)),
                status=block.value(SubRowKind.STATUS, col),
            )
            if rec.is_empty:
                continue
            records.append(rec)
    return records


def parse_matrix(matrix: Sequence[Sequence[Any] | None], file_name: str) -> ParsedSheet:
    """Parse a sheet matrix into a ParsedSheet.

    Raises:
        HeaderNotFoundError: no day header row in the first rows
        MonthYearNotFoundError: month/year not in sheet nor file name
        NoDayColumnsError: header row has no usable day columns
        NoRecordsError: parsing produced zero records
    """
    header_row = find_day_header_row(matrix)
    if header_row < 0:
        raise HeaderNotFoundError()
    month_year = resolve_month_year(matrix, file_name)

    day_cols = day_columns(matrix[header_row] or [])
    if not day_cols:
        raise NoDayColumnsError()

    blocks = iter_employee_blocks(matrix, header_row)
    employees: dict[str, EmployeeIdentity] = {}
    for block in blocks:
        employees.setdefault(block.identity.key, block.identity)

    records = build_records(blocks, day_cols, month_year)
    if not records:
        raise NoRecordsError()

    logger.debug(
        f"{file_name}: header_row={header_row + 1} month={month_year.label} "
        f"days={len(day_cols)} employees={len(employees)} records={len(records)}"
    )
    return ParsedSheet(
        file_name=file_name,
        month_year=month_year,
        employees=list(employees.values()),
        records=records,
    )


def parse_workbook(source: Path | bytes | BinaryIO, file_name: str | None = None) -> ParsedSheet:
    """Read the first worksheet of ``source`` and parse it.

    ``file_name`` is used for month resolution; it defaults to the path name.
    """
    if file_name is None:
        file_name = source.name if isinstance(source, Path) else ""
    _, matrix = read_first_sheet(source)
    return parse_matrix(matrix, file_name)
