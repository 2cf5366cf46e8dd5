from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.attendance_record import EmployeeIdentity
from .cells import SubRowKind, cell_text, classify_label

"""Employee block parser.

Below the day header, each employee starts with a ``PAYROLL NO. CARD NO. &
NAME ...`` label in column 0, followed by labelled sub-rows (IN1, OUT1, IN2,
OUT2, STATUS) holding one value per day column.
"""

__all__ = [
    "BLOCK_ROWS",
    "EmployeeBlock",
    "is_employee_label",
    "clean_employee_name",
    "parse_payroll_label",
    "iter_employee_blocks",
]

logger = logging.getLogger(__name__)

BLOCK_ROWS = 16  # sub-rows scanned after the label row

_LABEL_RE = re.compile(r"^PAYROLL\s+NO\.\s+CARD\s+NO\.\s*&\s*NAME", re.IGNORECASE)
_PRIMARY_RE = re.compile(
    r"NAME\s*([0-9]+)\s+([0-9]+)\s+(.+?)(?:\s{2,}|Present:|Absent:|Hours_Worked:|Overtime:|$)",
    re.IGNORECASE,
)
_NUM_RE = re.compile(r"\d+")
_TRAILERS = [
    re.compile(r"\s+Present:.*$", re.IGNORECASE),
    re.compile(r"\s+Absent:.*$", re.IGNORECASE),
    re.compile(r"\s+Hours[_\s]*Worked:.*$", re.IGNORECASE),
    re.compile(r"\s+Overtime:.*$", re.IGNORECASE),
]


@dataclass(frozen=True)
class EmployeeBlock:
    identity: EmployeeIdentity
    label_row: int  # 0-based matrix row of the PAYROLL label
    sub_rows: dict[SubRowKind, Sequence[Any]] = field(default_factory=dict)

    def value(self, kind: SubRowKind, column: int) -> str:
        row = self.sub_rows.get(kind)
        if row is None or column >= len(row):
            return ""
        return cell_text(row[column])


def is_employee_label(value: Any) -> bool:
    return _LABEL_RE.match(cell_text(value)) is not None


def clean_employee_name(raw: str) -> str:
    """Strip trailing summary annotations (Present:, Absent:, ...) from a name."""
    name = cell_text(raw)
    for pattern in _TRAILERS:
        name = pattern.sub("", name)
    return name.strip()


def parse_payroll_label(text: str) -> EmployeeIdentity:
    """Extract payroll number, card number and name from a label cell.

    Primary form: ``... NAME <payroll> <card> <name>``. Fallback: the first two
    integers are payroll/card and the text after the card number is the name.
    """
    t = cell_text(text)
    m = _PRIMARY_RE.search(t)
    if m:
        return EmployeeIdentity(
            payroll_number=m.group(1).strip(),
            card_number=m.group(2).strip(),
            name=clean_employee_name(m.group(3)),
        )

    nums = list(_NUM_RE.finditer(t))
    payroll = nums[0].group() if nums else ""
    card = nums[1].group() if len(nums) > 1 else ""
    name = clean_employee_name(t[nums[1].end():]) if card else ""
    return EmployeeIdentity(payroll_number=payroll, card_number=card, name=name)


def _collect_sub_rows(
    matrix: Sequence[Sequence[Any] | None], label_row: int
) -> dict[SubRowKind, Sequence[Any]]:
    sub_rows: dict[SubRowKind, Sequence[Any]] = {}
    last = min(len(matrix) - 1, label_row + BLOCK_ROWS)
    for r in range(label_row + 1, last + 1):
        row = matrix[r] or []
        if not row:
            continue
        # 次の従業員ラベルでブロック終端
        if is_employee_label(row[0]):
            break
        kind = classify_label(row[0])
        if kind is not None and kind not in sub_rows:
            sub_rows[kind] = row
    return sub_rows


def iter_employee_blocks(
    matrix: Sequence[Sequence[Any] | None], header_row: int
) -> list[EmployeeBlock]:
    """Parse every employee block below ``header_row``.

    Blocks whose label yields no identity key are dropped. Blocks without any
    recognizable sub-row are kept (with empty ``sub_rows``).
    """
    blocks: list[EmployeeBlock] = []
    for r in range(header_row + 1, len(matrix)):
        row = matrix[r] or []
        if not row or not is_employee_label(row[0]):
            continue
        identity = parse_payroll_label(cell_text(row[0]))
        if not identity.key:
            logger.warning(f"row {r + 1}: employee label without payroll/card/name dropped")
            continue
        blocks.append(EmployeeBlock(identity=identity, label_row=r, sub_rows=_collect_sub_rows(matrix, r)))
    return blocks
