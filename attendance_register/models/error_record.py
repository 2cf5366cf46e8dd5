from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One line of the error log: which file failed, at which stage, and why."""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Error log entry.

    Attributes:
        timestamp: UTC, ISO8601 with a ``Z`` suffix
        file: Workbook file name
        stage: ``PARSE`` or ``SUBMIT``
        error_type: UPPER_SNAKE classification (e.g. ``HEADER_NOT_FOUND``)
        message: The message shown to the operator
    """
    timestamp: str
    file: str
    stage: str
    error_type: str
    message: str

    @classmethod
    def create(cls, file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        now = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(timestamp=now, file=file, stage=stage, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        # キー集合は固定 (フィールド以外は出さない)
        return json.dumps(asdict(self), ensure_ascii=False)
