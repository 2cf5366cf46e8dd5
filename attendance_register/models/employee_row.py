from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .attendance_record import EmployeeIdentity

"""Display-side models for the per-employee / per-date register grid."""

__all__ = [
    "UNKNOWN",
    "DayCell",
    "EmployeeMeta",
    "EmployeeRow",
]

# メタデータ未取得時の表示値
UNKNOWN = "unknown"


@dataclass(frozen=True)
class DayCell:
    in_time: str = ""
    out_time: str = ""
    status: str = ""
    # 元レコードの識別子 (同一社員 ID でも給与番号・氏名が異なる場合がある)
    identity: EmployeeIdentity | None = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not (self.in_time or self.out_time or self.status)


@dataclass(frozen=True)
class EmployeeMeta:
    """Optional enrichment returned by the employee metadata endpoint."""
    employee_id: str
    dept: str | None = None
    designation: str | None = None
    name: str | None = None

    @staticmethod
    def from_payload(data: dict[str, Any]) -> EmployeeMeta:
        def _opt(key: str) -> str | None:
            v = data.get(key)
            if v is None:
                return None
            return str(v).strip() or None

        return EmployeeMeta(
            employee_id=str(data.get("employeeId", "")).strip(),
            dept=_opt("dept"),
            designation=_opt("designation"),
            name=_opt("name"),
        )


@dataclass
class EmployeeRow:
    """One grid row. ``identity`` keeps the source identifiers for re-flattening."""
    employee_id: str
    name: str
    identity: EmployeeIdentity
    department: str = UNKNOWN
    designation: str = UNKNOWN
    by_date: dict[date, DayCell] = field(default_factory=dict)

    def cell(self, day: date) -> DayCell | None:
        return self.by_date.get(day)
