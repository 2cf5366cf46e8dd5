from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from conftest import build_register_rows, employee_label

from attendance_register.cli.__main__ import main as cli_main

"""End-to-end run: two register files, live mode against a stubbed HTTP session."""


def _ok_response(body: dict[str, Any]) -> MagicMock:
    resp = MagicMock()
    resp.ok = True
    resp.status_code = 200
    resp.json.return_value = body
    resp.text = "json"
    return resp


@pytest.fixture
def two_register_files(make_register_file, march_rows) -> list[Path]:
    april = build_register_rows(
        [
            (
                employee_label("101", "5001", "John Smith Present: 2 Absent: 0"),
                {"IN1": ["09:00", "09:10"], "OUT1": ["13:00", "13:00"], "IN2": ["14:00", "14:00"], "OUT2": ["18:00", ""]},
            ),
            (employee_label("102", "5002", "Asha Rao"), {"STATUS": ["H", "H"]}),
            (employee_label("103", "5003", "No Data"), {}),
        ],
        title="Monthly Performance Register from 01/04/2024 to 30/04/2024",
        days=30,
    )
    return [
        make_register_file("march.xlsx", march_rows),
        make_register_file("april.xlsx", april),
    ]


def test_run_submits_one_payload_per_file(write_config, temp_workdir: Path, two_register_files, monkeypatch, capsys):
    monkeypatch.setenv("ATTENDANCE_API_TOKEN", "tok-123")
    session = MagicMock()
    session.post.return_value = _ok_response({"message": "imported"})

    with patch("attendance_register.api.client.requests.Session", return_value=session):
        code = cli_main([])

    assert code == 0
    assert session.post.call_count == 2
    payloads = {call.kwargs["json"]["monthYear"]["month"]: call.kwargs for call in session.post.call_args_list}

    april = payloads[4]
    assert april["headers"]["Authorization"] == "Bearer tok-123"
    body = april["json"]
    assert body["monthYear"] == {"year": 2024, "month": 4}
    assert body["totalEmployees"] == 3  # 空ブロックの従業員も数える
    assert body["totalRecords"] == 4
    john = [r for r in body["records"] if r["cardNo"] == "5001"]
    assert john == [
        {"payrollNo": "101", "cardNo": "5001", "employeeName": "John Smith", "date": "2024-04-01",
         "inTime": "09:00", "outTime": "18:00", "status": ""},
        {"payrollNo": "101", "cardNo": "5001", "employeeName": "John Smith", "date": "2024-04-02",
         "inTime": "09:10", "outTime": "13:00", "status": ""},
    ]

    march = payloads[3]["json"]
    assert march["totalRecords"] == 2
    assert march["records"][1] == {
        "payrollNo": "101", "cardNo": "5001", "employeeName": "John Smith", "date": "2024-03-02",
        "inTime": "09:05", "outTime": "", "status": "A",
    }

    out = capsys.readouterr().out
    assert "mode=live" in out
    assert "SUMMARY files=2/2 success=2 failed=0 records=6 employees=4" in out
    assert not list((temp_workdir / "logs").glob("errors-*.log"))
