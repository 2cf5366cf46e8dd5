from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run error log (JSON Lines).

Failed files are buffered during the run and written once at the end to
``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC stamp of the first write). A run
without failures leaves no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Buffered error records; not thread-safe (files are processed serially)."""

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._logs_dir = logs_dir
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        # 初回アクセス時に確定し、以降の flush は同じファイルへ追記
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def add(self, file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        """Timestamp and buffer one failure."""
        record = ErrorRecord.create(file=file, stage=stage, error_type=error_type, message=message)
        self._records.append(record)
        return record

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; None when there was nothing to write."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(r.to_json_line() + "\n" for r in self._records)
        with fp.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._records.clear()
        return fp
