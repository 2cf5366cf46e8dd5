from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from .parsed_sheet import ParsedSheet

"""ExcelFile model and FileStatus enum.

ExcelFile is the processing context of one workbook during a run, from
discovery to success or failure.
"""


class FileStatus(Enum):
    """Status of one file in a run.

    State transitions: pending -> parsed -> (success | failed)
    A file may also fail straight from pending when parsing fails.
    """
    PENDING = "pending"
    PARSED = "parsed"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    path: Path
    name: str
    status: FileStatus = FileStatus.PENDING
    parsed: ParsedSheet | None = None
    response: Any = None  # bulk-import response body (submitted files only)
    start_time: datetime | None = None
    end_time: datetime | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
