from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest
from conftest import build_register_rows, employee_label, write_excel

from attendance_register.excel.cells import cell_text
from attendance_register.excel.errors import WorkbookReadError
from attendance_register.excel.reader import frame_to_matrix, read_first_sheet
from attendance_register.services.records import parse_workbook


def test_read_first_sheet_only(tmp_path: Path):
    path = tmp_path / "multi.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["first", 1]]).to_excel(writer, sheet_name="Register", header=False, index=False)
        pd.DataFrame([["second", 2]]).to_excel(writer, sheet_name="Other", header=False, index=False)
    name, matrix = read_first_sheet(path)
    assert name == "Register"
    assert matrix[0][0] == "first"
    assert cell_text(matrix[0][1]) == "1"


def test_read_first_sheet_keeps_na_strings_and_blanks_as_none(tmp_path: Path):
    path = write_excel(tmp_path / "na.xlsx", [["STATUS", "NA", None, "P"]])
    _, matrix = read_first_sheet(path)
    assert matrix[0][1] == "NA"
    assert matrix[0][2] is None
    assert matrix[0][3] == "P"


def test_read_first_sheet_from_bytes(tmp_path: Path):
    path = write_excel(tmp_path / "b.xlsx", [["x", "y"]])
    _, matrix = read_first_sheet(path.read_bytes())
    assert matrix[0] == ["x", "y"]


def test_frame_to_matrix_converts_nan():
    df = pd.DataFrame([[1.0, float("nan")], ["a", None]])
    assert frame_to_matrix(df) == [[1.0, None], ["a", None]]


def test_parse_workbook_end_to_end(tmp_path: Path, march_rows):
    path = write_excel(tmp_path / "register.xlsx", march_rows)
    parsed = parse_workbook(path)
    assert parsed.file_name == "register.xlsx"
    assert [(r.date, r.in_time, r.out_time, r.status) for r in parsed.records] == [
        (date(2024, 3, 1), "09:00", "18:00", "P"),
        (date(2024, 3, 2), "09:05", "", "A"),
    ]


def test_parse_workbook_month_from_filename(tmp_path: Path):
    rows = build_register_rows([(employee_label("1", "11", "A"), {"STATUS": ["P"]})], title="Register")
    path = write_excel(tmp_path / "Report 15.6.2023.xlsx", rows)
    parsed = parse_workbook(path)
    assert parsed.month_year.label == "2023-06"


def test_parse_workbook_bytes_need_file_name(tmp_path: Path):
    rows = build_register_rows([(employee_label("1", "11", "A"), {"STATUS": ["P"]})], title="Register")
    data = write_excel(tmp_path / "tmp.xlsx", rows).read_bytes()
    parsed = parse_workbook(data, file_name="Report 1.7.2023.xlsx")
    assert parsed.month_year.label == "2023-07"


def test_parse_workbook_not_an_excel_file(tmp_path: Path):
    bad = tmp_path / "bad.xlsx"
    bad.write_bytes(b"not a zip")
    with pytest.raises(WorkbookReadError) as exc_info:
        parse_workbook(bad)
    assert exc_info.value.error_type == "READ_ERROR"
    assert str(exc_info.value).startswith("Failed to read Excel file:")
