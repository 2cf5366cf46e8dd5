from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""Import progress bar (tqdm, TTY only).

One bar per run, one tick per workbook. Counters (imported / failed / records)
are kept here and shown as the bar postfix. Without a TTY nothing is drawn so
CI logs stay free of control sequences; the counters are still maintained.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Per-workbook progress with running import counters."""

    def __init__(self, total_files: int, *, description: str = "Importing files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.imported = 0
        self.failed = 0
        self.records = 0
        self.pbar: Any = (
            tqdm(total=total_files, desc=description, unit="file", leave=True, ncols=80, ascii=True)
            if is_tty_enabled()
            else None
        )

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool, records: int = 0) -> None:
        """Count one workbook as imported (with its record count) or failed."""
        if success:
            self.imported += 1
            self.records += records
        else:
            self.failed += 1
        if self.pbar is None:
            return
        self.pbar.set_postfix(ok=self.imported, ng=self.failed, records=self.records)
        self.pbar.update(1)
        self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
