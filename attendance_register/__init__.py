"""Attendance register importer.

Reads monthly performance register spreadsheets (.xlsx), turns each employee's
IN/OUT/STATUS block into flat attendance records and submits them to the
attendance bulk-import API.
"""

__version__ = "0.1.0"
