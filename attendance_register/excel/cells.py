from __future__ import annotations

import math
import re
from datetime import datetime, time
from enum import Enum
from typing import Any

"""Cell classifier: pure helpers that test or normalize one raw cell."""

__all__ = [
    "SubRowKind",
    "cell_text",
    "normalize_key",
    "is_day_number",
    "classify_label",
]

_DAY_RE = re.compile(r"^\d{1,2}$")
_KEY_STRIP_RE = re.compile(r"[\s_\-]+")


class SubRowKind(Enum):
    """Sub-row labels inside an employee block (column 0)."""
    IN1 = "in1"
    OUT1 = "out1"
    IN2 = "in2"
    OUT2 = "out2"
    STATUS = "status"


_LABELS = {kind.value: kind for kind in SubRowKind}


def cell_text(value: Any) -> str:
    """Return the trimmed text of a cell ("" for empty / NaN)."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # 1.0 -> "1" (数値列は float として読まれることがある)
        if value.is_integer():
            return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.strftime("%H:%M")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value).replace("\u00a0", " ").strip()


def normalize_key(value: Any) -> str:
    """Lowercase key with whitespace, underscores and hyphens removed."""
    return _KEY_STRIP_RE.sub("", cell_text(value).lower())


def is_day_number(value: Any) -> bool:
    """True for a 1-2 digit integer in [1, 31]."""
    t = cell_text(value)
    if not _DAY_RE.match(t):
        return False
    return 1 <= int(t) <= 31


def classify_label(value: Any) -> SubRowKind | None:
    """Classify a sub-row label; unrecognized labels give None."""
    return _LABELS.get(normalize_key(value))
