from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_BULK_IMPORT_PATH,
    DEFAULT_META_PATH,
    DEFAULT_REGISTER_PATH,
    DEFAULT_TIMEOUT_SEC,
    ApiConfig,
    ImportConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/import.yml``)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults (API paths, timeout, enrich_metadata=true)
- Pick up the API token from ``ATTENDANCE_API_TOKEN``
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")
TOKEN_ENV = "ATTENDANCE_API_TOKEN"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the data
            violates the schema (missing keys, wrong types, extra keys)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    api_raw = data["api"]
    # トークンは YAML に書かせない (環境変数 / .env のみ)
    token = os.getenv(TOKEN_ENV) or None
    api = ApiConfig(
        base_url=api_raw["base_url"],
        bulk_import_path=api_raw.get("bulk_import_path", DEFAULT_BULK_IMPORT_PATH),
        register_path=api_raw.get("register_path", DEFAULT_REGISTER_PATH),
        meta_path=api_raw.get("meta_path", DEFAULT_META_PATH),
        timeout_sec=float(api_raw.get("timeout_sec", DEFAULT_TIMEOUT_SEC)),
        token=token,
    )
    return ImportConfig(
        source_directory=data["source_directory"],
        api=api,
        enrich_metadata=data.get("enrich_metadata", True),
    )
