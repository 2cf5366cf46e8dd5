from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

"""MonthYear model: the single calendar month an attendance sheet covers."""

__all__ = [
    "MonthYear",
]


@dataclass(frozen=True)
class MonthYear:
    year: int
    month: int  # 1-12

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if self.year <= 0:
            raise ValueError(f"year out of range: {self.year}")

    @property
    def label(self) -> str:
        """``YYYY-MM`` (register API month key)."""
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def date_for(self, day: int) -> date | None:
        """Return the date for ``day`` or None when the month has no such day."""
        if not 1 <= day <= self.days_in_month:
            return None
        return date(self.year, self.month, day)

    def to_payload(self) -> dict[str, int]:
        return {"year": self.year, "month": self.month}

    @staticmethod
    def parse(label: str) -> MonthYear:
        """Parse a ``YYYY-MM`` label.

        Raises:
            ValueError: if the label is not a valid year-month
        """
        parts = label.strip().split("-")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"invalid month label: {label!r} (expected YYYY-MM)")
        return MonthYear(year=int(parts[0]), month=int(parts[1]))
