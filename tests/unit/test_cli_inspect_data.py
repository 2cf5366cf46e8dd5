from __future__ import annotations

from unittest.mock import patch

from conftest import build_register_rows, employee_label, write_malformed_workbook

from attendance_register.cli.__main__ import main as cli_main
from attendance_register.models.employee_row import EmployeeMeta


def test_inspect_prints_grid_without_submitting(write_config, make_register_file, march_rows, capsys):
    make_register_file("march.xlsx", march_rows)
    make_register_file("broken.xlsx", build_register_rows([], title=None))
    with patch("attendance_register.cli.__main__.AttendanceApiClient") as client_cls:
        code = cli_main(["--inspect-data"])
    assert code == 0
    client_cls.from_config.assert_not_called()  # enrich_metadata: false
    out = capsys.readouterr().out
    assert "FILE: march.xlsx" in out
    assert "month=2024-03 employees=1 records=2" in out
    assert "09:00-18:00 P" in out
    assert "John Smith" in out
    assert "FILE: broken.xlsx" in out
    assert "parse_error:" in out


def test_inspect_uses_metadata_when_enabled(write_config, make_register_file, march_rows, capsys):
    text = write_config.read_text(encoding="utf-8").replace("enrich_metadata: false", "enrich_metadata: true")
    write_config.write_text(text, encoding="utf-8")
    make_register_file("march.xlsx", march_rows)
    with patch("attendance_register.cli.__main__.AttendanceApiClient") as client_cls:
        client = client_cls.from_config.return_value
        client.fetch_employee_meta.return_value = {
            "5001": EmployeeMeta(employee_id="5001", dept="Operations", designation="Supervisor")
        }
        code = cli_main(["--inspect-data"])
    assert code == 0
    client.submit_bulk.assert_not_called()
    out = capsys.readouterr().out
    assert "Operations" in out
    assert "Supervisor" in out


def test_inspect_no_files(write_config, capsys):
    assert cli_main(["--inspect-data"]) == 0
    assert "inspect: no .xlsx files" in capsys.readouterr().out


def test_inspect_search_filter(write_config, make_register_file, capsys):
    rows = build_register_rows(
        [
            (employee_label("1", "11", "Alpha Person"), {"STATUS": ["P"]}),
            (employee_label("2", "22", "Beta Person"), {"STATUS": ["A"]}),
        ]
    )
    make_register_file("two.xlsx", rows)
    assert cli_main(["--inspect-data", "--status", "ABSENT"]) == 0
    out = capsys.readouterr().out
    assert "Beta Person" in out
    assert "Alpha Person" not in out


def test_inspect_reports_unreadable_workbook_and_continues(write_config, temp_workdir, make_register_file, march_rows, capsys):
    write_malformed_workbook(temp_workdir / "data" / "a-legacy.xlsx", "legacy_xls")
    make_register_file("b-march.xlsx", march_rows)
    assert cli_main(["--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "FILE: a-legacy.xlsx" in out
    assert "parse_error: Failed to read Excel file:" in out
    assert "month=2024-03 employees=1 records=2" in out
