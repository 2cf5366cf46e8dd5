from __future__ import annotations

"""Structural parse errors.

All of these are fatal for the file being parsed; the message is reported to
the user verbatim.
"""

__all__ = [
    "AttendanceParseError",
    "EmptyWorkbookError",
    "WorkbookReadError",
    "HeaderNotFoundError",
    "MonthYearNotFoundError",
    "NoDayColumnsError",
    "NoRecordsError",
]


class AttendanceParseError(Exception):
    """Base class for structural errors in an attendance workbook."""

    error_type = "PARSE_ERROR"


class EmptyWorkbookError(AttendanceParseError):
    error_type = "NO_SHEETS"

    def __init__(self, message: str = "No sheets found in the Excel file.") -> None:
        super().__init__(message)


class WorkbookReadError(AttendanceParseError):
    """The file could not be opened as an .xlsx workbook (corrupt, .xls, .docx, ...)."""

    error_type = "READ_ERROR"

    def __init__(self, message: str = "Failed to read Excel file.") -> None:
        super().__init__(message)


class HeaderNotFoundError(AttendanceParseError):
    error_type = "HEADER_NOT_FOUND"

    def __init__(self, message: str = "Could not detect the day header row (01,02,03...).") -> None:
        super().__init__(message)


class MonthYearNotFoundError(AttendanceParseError):
    error_type = "MONTH_YEAR_NOT_FOUND"

    def __init__(
        self, message: str = "Could not detect month/year from sheet header or filename."
    ) -> None:
        super().__init__(message)


class NoDayColumnsError(AttendanceParseError):
    error_type = "NO_DAY_COLUMNS"

    def __init__(self, message: str = "No day columns detected.") -> None:
        super().__init__(message)


class NoRecordsError(AttendanceParseError):
    error_type = "NO_RECORDS"

    def __init__(
        self, message: str = "No attendance records found. Please verify the Excel format."
    ) -> None:
        super().__init__(message)
