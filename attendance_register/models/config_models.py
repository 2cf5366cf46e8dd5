from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the attendance register importer.

These are the typed form of ``config/import.yml``; loading and validation live
in ``attendance_register.config.loader``.
"""

DEFAULT_BULK_IMPORT_PATH = "/api/time/attendance/bulk-import"
DEFAULT_REGISTER_PATH = "/api/time/attendance/register"
DEFAULT_META_PATH = "/api/employees/meta-by-ids"
DEFAULT_TIMEOUT_SEC = 30.0


@dataclass(frozen=True)
class ApiConfig:
    """Attendance API endpoints.

    The bearer token is not part of the YAML file; it is read from the
    environment (``ATTENDANCE_API_TOKEN``) and passed explicitly to the client.
    """
    base_url: str
    bulk_import_path: str = DEFAULT_BULK_IMPORT_PATH
    register_path: str = DEFAULT_REGISTER_PATH
    meta_path: str = DEFAULT_META_PATH
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    token: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    source_directory: str  # Directory to scan for .xlsx files
    api: ApiConfig
    enrich_metadata: bool = True  # 表示時にメタデータ (部署/役職) を取得するか
