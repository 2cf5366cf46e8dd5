from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for an import run.

FileStat carries per-file numbers, ProcessingResult aggregates them for the
SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    records: int  # 送信レコード数 (失敗時 0)
    employees: int
    elapsed_seconds: float
    month: str | None = None  # YYYY-MM, None when parsing failed before resolution
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of ``process_all``."""
    success_files: int
    failed_files: int
    total_records: int
    total_employees: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_records_per_sec: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
