from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..api.client import AttendanceApiClient, SubmissionError
from ..excel.errors import AttendanceParseError
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import ImportConfig
from ..models.excel_file import ExcelFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult
from .progress import ProgressTracker
from .records import parse_workbook

"""Run orchestration.

Scans the source directory, then for each workbook: parse, then submit all of
its records in one request. A file either goes in completely or not at all;
a failed file is logged and the run continues with the next one.
"""

logger = logging.getLogger(__name__)

STAGE_PARSE = "PARSE"
STAGE_SUBMIT = "SUBMIT"


class ProcessingError(Exception):
    """Fatal error that stops the whole run."""
    pass


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        # Excel の一時ファイル (~$xxx.xlsx) は除外
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_file(
    file_path: Path,
    client: AttendanceApiClient | None,
    error_log: ErrorLogBuffer,
) -> ExcelFile:
    """Parse and (unless ``client`` is None) submit one workbook."""
    start = datetime.now(UTC)
    current = ExcelFile(path=file_path, name=file_path.name, start_time=start)

    try:
        parsed = parse_workbook(file_path)
    except AttendanceParseError as e:
        return _fail(current, error_log, STAGE_PARSE, e.error_type, str(e))

    current = replace(current, status=FileStatus.PARSED, parsed=parsed)
    logger.info(
        f"{file_path.name}: month={parsed.month_year.label} "
        f"employees={parsed.total_employees} records={parsed.total_records}"
    )

    if client is None:
        return replace(current, status=FileStatus.SUCCESS, end_time=datetime.now(UTC))

    try:
        response = client.submit_bulk(parsed)
    except SubmissionError as e:
        return _fail(current, error_log, STAGE_SUBMIT, e.error_type, str(e))

    return replace(current, status=FileStatus.SUCCESS, response=response, end_time=datetime.now(UTC))


def _fail(
    current: ExcelFile, error_log: ErrorLogBuffer, stage: str, error_type: str, message: str
) -> ExcelFile:
    logger.error(f"{current.name}: {message}")
    error_log.add(current.name, stage, error_type, message)
    return replace(
        current,
        status=FileStatus.FAILED,
        end_time=datetime.now(UTC),
        error=message,
        error_type=error_type,
    )


def process_all(
    config: ImportConfig,
    client: AttendanceApiClient | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Process every workbook in ``config.source_directory``.

    Args:
        config: Import configuration
        client: API client; None = dry run (parse only, nothing submitted)
        error_log: Error log buffer (a new one is created when omitted)

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_excel_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    total_employees = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            result = process_file(file_path, client, error_log)
            parsed = result.parsed
            ok = result.status == FileStatus.SUCCESS and parsed is not None
            records = parsed.total_records if ok else 0
            employees = parsed.total_employees if ok else 0

            progress.finish_file(success=ok, records=records)
            total_employees += employees
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=result.status.value,
                    records=records,
                    employees=employees,
                    elapsed_seconds=result.elapsed_seconds,
                    month=parsed.month_year.label if parsed is not None else None,
                    error=result.error,
                )
            )

    success_count = progress.imported
    failed_count = progress.failed
    total_records = progress.records

    try:
        log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"failed to write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log: {log_path}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_records=total_records,
        total_employees=total_employees,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_records_per_sec=throughput,
        file_stats=file_stats,
    )
