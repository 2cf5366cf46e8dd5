"""Domain models for the attendance register importer."""

from .attendance_record import AttendanceRecord, EmployeeIdentity
from .config_models import ApiConfig, ImportConfig
from .employee_row import UNKNOWN, DayCell, EmployeeMeta, EmployeeRow
from .month_year import MonthYear
from .parsed_sheet import ParsedSheet
from .register_row import RegisterRow

__all__ = [
    # Configuration models
    "ApiConfig",
    "ImportConfig",
    # Parsing models
    "MonthYear",
    "EmployeeIdentity",
    "AttendanceRecord",
    "ParsedSheet",
    # Display models
    "UNKNOWN",
    "DayCell",
    "EmployeeMeta",
    "EmployeeRow",
    "RegisterRow",
]
