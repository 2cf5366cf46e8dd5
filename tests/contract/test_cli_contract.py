from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import patch

from attendance_register.api.client import SubmissionError
from attendance_register.cli.__main__ import (
    EXIT_FATAL,
    EXIT_PARTIAL_FAILURE,
    EXIT_SUCCESS_ALL,
)
from attendance_register.cli.__main__ import main as cli_main

"""CLI surface: exit codes and the SUMMARY line format."""

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) failed=(\d+) records=(\d+) employees=(\d+) "
    r"elapsed_sec=[0-9.]+ throughput_rps=[0-9.]+$",
    re.MULTILINE,
)


def test_exit_code_values():
    assert (EXIT_SUCCESS_ALL, EXIT_FATAL, EXIT_PARTIAL_FAILURE) == (0, 1, 2)


def test_summary_line_matches_format(write_config, make_register_file, march_rows, capsys):
    make_register_file("march.xlsx", march_rows)
    assert cli_main(["--dry-run"]) == EXIT_SUCCESS_ALL

    m = SUMMARY_RE.search(capsys.readouterr().out)
    assert m is not None
    total, total_again, success, failed, records, employees = map(int, m.groups())
    assert total == total_again == 1
    assert success + failed == total
    assert (records, employees) == (2, 1)


def test_missing_config_is_fatal(temp_workdir: Path):
    assert cli_main(["--config", "config/missing.yml"]) == EXIT_FATAL


def test_missing_source_directory_is_fatal(write_config, temp_workdir: Path):
    (temp_workdir / "data").rmdir()
    assert cli_main([]) == EXIT_FATAL


def test_any_failed_file_is_partial(write_config, make_register_file, march_rows):
    make_register_file("march.xlsx", march_rows)
    with patch("attendance_register.cli.__main__.AttendanceApiClient") as client_cls:
        client_cls.from_config.return_value.submit_bulk.side_effect = SubmissionError("Upload failed (500)", 500)
        assert cli_main([]) == EXIT_PARTIAL_FAILURE


def test_cli_package_does_not_import_entry_module():
    # python -m attendance_register.cli が __main__ を二重にロードしないこと
    import attendance_register.cli as cli_pkg

    assert not hasattr(cli_pkg, "main")
    assert cli_main.__module__ == "attendance_register.cli.__main__"
