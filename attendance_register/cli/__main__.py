from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from ..api.client import AttendanceApiClient, RegisterFetchError
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.errors import AttendanceParseError
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.attendance_record import AttendanceRecord
from ..models.config_models import ImportConfig
from ..models.employee_row import EmployeeMeta
from ..models.month_year import MonthYear
from ..services.matrix import filter_rows, project, sort_rows
from ..services.orchestrator import ProcessingError, process_all, scan_excel_files
from ..services.records import parse_workbook
from ..services.render import render_grid, render_status_summary
from ..services.status import StatusCategory, summary_by_date
from ..services.summary import render_summary_line

"""CLI entrypoint.

Modes:
- default: parse every .xlsx in source_directory and submit each to the
  bulk-import API, then print the SUMMARY line
- --dry-run: parse only
- --inspect-data: print the parsed register grid per file
- --register-month YYYY-MM: fetch an imported month back and print it
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Attendance register (.xlsx) -> bulk-import API")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config YAML path")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Parse files without submitting")
    p.add_argument("--inspect-data", action="store_true", help="Print the parsed grid of each file then exit")
    p.add_argument("--register-month", metavar="YYYY-MM", help="Fetch and print an imported month")
    p.add_argument("--search", default="", help="Filter grid rows by id/name/dept/designation")
    p.add_argument(
        "--status",
        choices=[c.value for c in StatusCategory],
        help="Keep employees having at least one day with this status",
    )
    p.add_argument("--sort", choices=["empId", "name"], default="empId", help="Grid sort key")
    p.add_argument("--desc", action="store_true", help="Sort descending")
    return p.parse_args(argv)


def _print_grid(
    records: Sequence[AttendanceRecord],
    client: AttendanceApiClient | None,
    args: argparse.Namespace,
) -> None:
    meta: dict[str, EmployeeMeta] = {}
    if client is not None:
        meta = client.fetch_employee_meta(r.identity.employee_id for r in records)
    rows, dates = project(records, meta)
    status = StatusCategory(args.status) if args.status else None
    rows = filter_rows(rows, dates, search=args.search, status=status)
    rows = sort_rows(rows, args.sort, descending=args.desc)
    print(render_grid(rows, dates))
    print(render_status_summary(summary_by_date(records, dates)))


def _inspect_data(cfg: ImportConfig, args: argparse.Namespace) -> int:
    files = scan_excel_files(Path(cfg.source_directory))
    if not files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    client = AttendanceApiClient.from_config(cfg.api) if cfg.enrich_metadata else None
    for f in files:
        print(f"FILE: {f.name}")
        try:
            parsed = parse_workbook(f)
        except AttendanceParseError as e:
            print(f"  parse_error: {e}")
            continue
        print(
            f"  month={parsed.month_year.label} employees={parsed.total_employees} "
            f"records={parsed.total_records}"
        )
        _print_grid(parsed.records, client, args)
    return EXIT_SUCCESS_ALL


def _show_register(cfg: ImportConfig, args: argparse.Namespace) -> int:
    logger = setup_logging()
    try:
        month = MonthYear.parse(args.register_month)
    except ValueError as e:
        logger.error(f"register: {e}")
        return EXIT_FATAL
    client = AttendanceApiClient.from_config(cfg.api)
    try:
        rows = client.fetch_register_month(month.label, args.search)
    except RegisterFetchError as e:
        logger.error(f"register: {e}")
        return EXIT_FATAL
    logger.info(f"register month={month.label} rows={len(rows)}")
    records = [r.to_record() for r in rows]
    _print_grid(records, client if cfg.enrich_metadata else None, args)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] を渡されたときに sys.argv が混入しないよう None のときだけ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    if args.register_month:
        return _show_register(cfg, args)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg, args)

    client = None if args.dry_run else AttendanceApiClient.from_config(cfg.api)
    mode = "dry-run" if client is None else "live"
    try:
        result = process_all(cfg, client=client)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    logger.info(f"mode={mode} total_records={result.total_records}")

    log_summary(render_summary_line(result.total_files, result))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
