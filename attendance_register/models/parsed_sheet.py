from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .attendance_record import AttendanceRecord, EmployeeIdentity
from .month_year import MonthYear

"""ParsedSheet model: the complete result of parsing one attendance workbook.

Created fresh per file and discarded after submission; nothing here is
persisted.
"""

__all__ = [
    "ParsedSheet",
]


@dataclass(frozen=True)
class ParsedSheet:
    file_name: str
    month_year: MonthYear
    employees: list[EmployeeIdentity] = field(default_factory=list)  # first-seen order, unique key
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def total_employees(self) -> int:
        return len(self.employees)

    @property
    def total_records(self) -> int:
        return len(self.records)

    def employee_ids(self) -> list[str]:
        """Distinct display ids referenced by records (metadata lookup keys)."""
        seen: dict[str, None] = {}
        for rec in self.records:
            emp_id = rec.identity.employee_id
            if emp_id:
                seen.setdefault(emp_id, None)
        return list(seen)

    def to_payload(self) -> dict[str, Any]:
        """Bulk-import request body. All records go in a single payload."""
        return {
            "monthYear": self.month_year.to_payload(),
            "totalEmployees": self.total_employees,
            "totalRecords": self.total_records,
            "records": [r.to_payload() for r in self.records],
        }
