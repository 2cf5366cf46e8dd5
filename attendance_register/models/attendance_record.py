from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

"""Employee identity and flat attendance record models.

An AttendanceRecord is one (employee, day) pair with at least one of
in_time / out_time / status filled. Records are immutable once built and are
serialized to the bulk-import wire format with ``to_payload()``.
"""

__all__ = [
    "EmployeeIdentity",
    "AttendanceRecord",
]


@dataclass(frozen=True)
class EmployeeIdentity:
    """Identifiers found in a ``PAYROLL NO. CARD NO. & NAME`` label.

    Payroll number and card number are two distinct schemes for the same
    employee; either may be missing.
    """
    payroll_number: str = ""
    card_number: str = ""
    name: str = ""

    @property
    def key(self) -> str:
        """Identity key: card number, then payroll number, then name."""
        return self.card_number or self.payroll_number or self.name

    @property
    def employee_id(self) -> str:
        """Display id (card number, then payroll number). Empty if neither exists."""
        return self.card_number or self.payroll_number


@dataclass(frozen=True)
class AttendanceRecord:
    identity: EmployeeIdentity
    date: date
    in_time: str = ""
    out_time: str = ""
    status: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.in_time or self.out_time or self.status)

    def to_payload(self) -> dict[str, Any]:
        """Wire format expected by the bulk-import endpoint (camelCase keys)."""
        return {
            "payrollNo": self.identity.payroll_number,
            "cardNo": self.identity.card_number,
            "employeeName": self.identity.name,
            "date": self.date.isoformat(),
            "inTime": self.in_time,
            "outTime": self.out_time,
            "status": self.status,
        }
