# Shared pytest fixtures
from __future__ import annotations

import tempfile
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

DAY_LABEL = "Days"
TITLE_MARCH_2024 = "Monthly Performance Register from 01/03/2024 to 31/03/2024"


def employee_label(payroll: str, card: str, name: str) -> str:
    return f"PAYROLL NO. CARD NO. & NAME {payroll} {card} {name}"


def build_register_rows(
    employees: Sequence[tuple[str, dict[str, Sequence[Any]]]],
    *,
    title: str | None = TITLE_MARCH_2024,
    days: int = 31,
) -> list[list[Any]]:
    """Build a register sheet matrix.

    employees: (label cell, {sub-row label: values for day 1..n})
    """
    rows: list[list[Any]] = []
    if title is not None:
        rows.append([title])
    rows.append([DAY_LABEL] + list(range(1, days + 1)))
    for label, sub_rows in employees:
        rows.append([label])
        for sub_label, values in sub_rows.items():
            padded = list(values) + [None] * (days - len(values))
            rows.append([sub_label] + padded)
    return rows


def write_excel(path: Path, rows: list[list[Any]], sheet_name: str = "Register") -> Path:
    df = pd.DataFrame(rows)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ATTENDANCE_API_TOKEN", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
enrich_metadata: false
api:
  base_url: http://hr.example.test
  bulk_import_path: /api/time/attendance/bulk-import
  timeout_sec: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def march_rows() -> list[list[Any]]:
    """John Smith, March 2024: two recorded days."""
    return build_register_rows(
        [
            (
                employee_label("101", "5001", "John Smith"),
                {
                    "IN1": ["09:00", "09:05"],
                    "OUT2": ["18:00", ""],
                    "STATUS": ["P", "A"],
                },
            )
        ]
    )


@pytest.fixture()
def make_register_file(temp_workdir: Path) -> Callable[..., Path]:
    def _make(name: str, rows: list[list[Any]]) -> Path:
        return write_excel(temp_workdir / "data" / name, rows)

    return _make


@pytest.fixture(autouse=True)
def _fresh_logging():
    from attendance_register.logging.init import reset_logging

    reset_logging()
    yield
    reset_logging()


def write_malformed_workbook(path: Path, kind: str) -> Path:
    """Write a file with an .xlsx name that pandas/openpyxl cannot read.

    kind: "docx" (zip without xl/workbook.xml), "broken_workbook" (xl/workbook.xml
    but no [Content_Types].xml), "legacy_xls" (OLE2 header, i.e. an old .xls)
    """
    if kind == "docx":
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("[Content_Types].xml", "<Types/>")
            zf.writestr("word/document.xml", "<w:document/>")
    elif kind == "broken_workbook":
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("xl/workbook.xml", "<workbook")
    elif kind == "legacy_xls":
        path.write_bytes(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504)
    else:
        raise ValueError(f"unknown kind: {kind}")
    return path
