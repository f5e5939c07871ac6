from __future__ import annotations

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig, HeaderSpec, SplitConfig

"""YAML config loader.

Responsibilities:
- Load the YAML run config (default config/split.yml)
- Validate it against config_schema.json shipped next to this module
- Apply defaults (output_directory, sheet_name, header labels)
- Let PAYOUT_PROJECT_CODE from the environment / .env override project_code
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/split.yml")
DEFAULT_OUTPUT_DIRECTORY = "./output"
DEFAULT_SHEET_NAME = "Completed"
PROJECT_CODE_ENV = "PAYOUT_PROJECT_CODE"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates
            the schema (missing required keys, wrong types, unknown keys).
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


def _to_decimal(value: Any) -> Decimal:
    # str() first so 0.1 from YAML stays 0.1 rather than its binary expansion
    return Decimal(str(value))


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    project_code = os.getenv(PROJECT_CODE_ENV) or data.get("project_code") or ""
    cpis = {str(k): _to_decimal(v) for k, v in (data.get("vendor_cpis") or {}).items()}
    try:
        headers = HeaderSpec.from_mapping(data.get("headers"))
    except ValueError as e:  # pragma: no cover (schema rejects unknown keys first)
        raise ConfigError(str(e)) from e

    return AppConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        sheet_name=data.get("sheet_name", DEFAULT_SHEET_NAME),
        split=SplitConfig(project_code=str(project_code).strip(), vendor_cpis=cpis, headers=headers),
    )
