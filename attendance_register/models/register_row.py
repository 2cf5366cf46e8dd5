from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from .attendance_record import AttendanceRecord, EmployeeIdentity

"""RegisterRow: a stored attendance row as returned by the register endpoint."""

__all__ = [
    "RegisterRow",
]


def _text(v: Any) -> str:
    return "" if v is None else str(v).strip()


@dataclass(frozen=True)
class RegisterRow:
    employee_id: str
    date: date
    month: str  # YYYY-MM
    payroll_number: str = ""
    card_number: str = ""
    employee_name: str = ""
    in_time: str = ""
    out_time: str = ""
    status: str = ""
    row_id: str = ""  # サーバ側 _id

    @staticmethod
    def from_payload(data: dict[str, Any]) -> RegisterRow:
        """Build from one JSON object of the register response.

        Raises:
            ValueError: if ``date`` is missing or not ``YYYY-MM-DD``
        """
        raw_date = _text(data.get("date"))
        try:
            day = date.fromisoformat(raw_date[:10])
        except ValueError as e:
            raise ValueError(f"invalid register date: {raw_date!r}") from e
        return RegisterRow(
            employee_id=_text(data.get("employeeId")),
            date=day,
            month=_text(data.get("month")) or day.strftime("%Y-%m"),
            payroll_number=_text(data.get("payrollNo")),
            card_number=_text(data.get("cardNo")),
            employee_name=_text(data.get("employeeName")),
            in_time=_text(data.get("inTime")),
            out_time=_text(data.get("outTime")),
            status=_text(data.get("status")),
            row_id=_text(data.get("_id")),
        )

    def to_record(self) -> AttendanceRecord:
        # cardNo 欠落時は employeeId をカード番号として扱う
        identity = EmployeeIdentity(
            payroll_number=self.payroll_number,
            card_number=self.card_number or self.employee_id,
            name=self.employee_name,
        )
        return AttendanceRecord(
            identity=identity,
            date=self.date,
            in_time=self.in_time,
            out_time=self.out_time,
            status=self.status,
        )
