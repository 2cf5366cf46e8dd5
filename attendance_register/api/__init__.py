"""HTTP client for the attendance bulk-import, register and employee metadata endpoints."""

from .client import AttendanceApiClient, RegisterFetchError, SubmissionError

__all__ = [
    "AttendanceApiClient",
    "RegisterFetchError",
    "SubmissionError",
]
