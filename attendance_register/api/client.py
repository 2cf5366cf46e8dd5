from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import requests

from ..models.config_models import ApiConfig
from ..models.employee_row import EmployeeMeta
from ..models.parsed_sheet import ParsedSheet
from ..models.register_row import RegisterRow

"""Attendance API client (requests).

- submit_bulk: one POST per parsed file; failure is terminal for that file,
  no retry.
- fetch_employee_meta: optional enrichment; every failure degrades to "no
  metadata" ({}).
- fetch_register_month: read back an imported month for verification.

The bearer token is passed in explicitly; nothing is read from global state.
"""

__all__ = [
    "ApiError",
    "SubmissionError",
    "RegisterFetchError",
    "AttendanceApiClient",
]

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for attendance API failures."""


class SubmissionError(ApiError):
    error_type = "SUBMISSION_FAILED"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RegisterFetchError(ApiError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _response_body(resp: requests.Response) -> Any:
    """JSON body if parseable, else ``{"raw": text}``."""
    text = resp.text
    try:
        return resp.json()
    except ValueError:
        return {"raw": text}


def _server_message(body: Any) -> str | None:
    if isinstance(body, dict):
        msg = body.get("message") or body.get("error")
        if msg:
            return str(msg)
    return None


class AttendanceApiClient:
    """Thin client over ``requests.Session``."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        bulk_import_path: str = "/api/time/attendance/bulk-import",
        register_path: str = "/api/time/attendance/register",
        meta_path: str = "/api/employees/meta-by-ids",
        timeout_sec: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.bulk_import_path = bulk_import_path
        self.register_path = register_path
        self.meta_path = meta_path
        self.timeout_sec = timeout_sec
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: ApiConfig, session: requests.Session | None = None) -> AttendanceApiClient:
        return cls(
            cfg.base_url,
            token=cfg.token,
            bulk_import_path=cfg.bulk_import_path,
            register_path=cfg.register_path,
            meta_path=cfg.meta_path,
            timeout_sec=cfg.timeout_sec,
            session=session,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, json_body: bool = True) -> dict[str, str]:
        headers: dict[str, str] = {}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def submit_bulk(self, parsed: ParsedSheet) -> Any:
        """POST all records of ``parsed`` in a single payload.

        Returns:
            The server response body (JSON, or ``{"raw": text}``)

        Raises:
            SubmissionError: network failure or non-2xx response
        """
        payload = parsed.to_payload()
        try:
            resp = self.session.post(
                self._url(self.bulk_import_path),
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_sec,
            )
        except requests.RequestException as e:
            raise SubmissionError(f"Upload failed: {e}") from e

        body = _response_body(resp)
        if not resp.ok:
            raise SubmissionError(
                _server_message(body) or f"Upload failed ({resp.status_code})",
                status_code=resp.status_code,
            )
        logger.debug(f"bulk import accepted: file={parsed.file_name} status={resp.status_code}")
        return body

    def fetch_employee_meta(self, employee_ids: Iterable[str]) -> dict[str, EmployeeMeta]:
        """Fetch department/designation/name per employee id.

        Any failure returns an empty mapping.
        """
        ids = [i for i in dict.fromkeys(employee_ids) if i]
        if not ids:
            return {}
        try:
            resp = self.session.post(
                self._url(self.meta_path),
                json={"employeeIds": ids},
                headers=self._headers(),
                timeout=self.timeout_sec,
            )
            resp.raise_for_status()
            items = resp.json()
            metas = [EmployeeMeta.from_payload(item) for item in items]
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            logger.debug(f"employee metadata unavailable: {e}")
            return {}
        return {m.employee_id: m for m in metas if m.employee_id}

    def fetch_register_month(self, month: str, q: str = "") -> list[RegisterRow]:
        """GET stored register rows for ``month`` (YYYY-MM).

        Raises:
            RegisterFetchError: network failure, non-2xx or malformed body
        """
        params = {"month": month}
        if q:
            params["q"] = q
        try:
            resp = self.session.get(
                self._url(self.register_path),
                params=params,
                headers=self._headers(json_body=False),
                timeout=self.timeout_sec,
            )
        except requests.RequestException as e:
            raise RegisterFetchError(f"Fetch failed: {e}") from e

        body = _response_body(resp)
        if not resp.ok:
            raise RegisterFetchError(
                _server_message(body) or f"Fetch failed ({resp.status_code})",
                status_code=resp.status_code,
            )
        if not isinstance(body, list):
            raise RegisterFetchError("Fetch failed: unexpected register response")
        try:
            return [RegisterRow.from_payload(item) for item in body]
        except (ValueError, AttributeError) as e:
            raise RegisterFetchError(f"Fetch failed: {e}") from e
