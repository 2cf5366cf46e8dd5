from __future__ import annotations

from datetime import date
from unittest.mock import patch

from attendance_register.api.client import RegisterFetchError
from attendance_register.cli.__main__ import main as cli_main
from attendance_register.models.register_row import RegisterRow


def _row(emp: str, day: int, status: str, name: str = "") -> RegisterRow:
    return RegisterRow(employee_id=emp, date=date(2024, 3, day), month="2024-03", employee_name=name, status=status)


def test_register_month_prints_grid_and_summary(write_config, capsys):
    with patch("attendance_register.cli.__main__.AttendanceApiClient") as client_cls:
        client = client_cls.from_config.return_value
        client.fetch_register_month.return_value = [
            _row("5001", 1, "P", "John Smith"),
            _row("5002", 1, "A", "Asha Rao"),
        ]
        code = cli_main(["--register-month", "2024-03", "--sort", "name"])
    assert code == 0
    client.fetch_register_month.assert_called_once_with("2024-03", "")
    client.fetch_employee_meta.assert_not_called()  # enrich_metadata: false
    out = capsys.readouterr().out
    assert "INFO register month=2024-03 rows=2" in out
    assert out.index("Asha Rao") < out.index("John Smith")
    assert "01-03-2024 Friday PRESENT=1 ABSENT=1" in out


def test_register_month_invalid_label(write_config, capsys):
    assert cli_main(["--register-month", "March"]) == 1
    assert "ERROR register: invalid month label" in capsys.readouterr().out


def test_register_month_fetch_error(write_config, capsys):
    with patch("attendance_register.cli.__main__.AttendanceApiClient") as client_cls:
        client_cls.from_config.return_value.fetch_register_month.side_effect = RegisterFetchError("db down", 500)
        code = cli_main(["--register-month", "2024-03"])
    assert code == 1
    assert "ERROR register: db down" in capsys.readouterr().out
