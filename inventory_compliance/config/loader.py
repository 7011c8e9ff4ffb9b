from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AppConfig

"""App config loader.

Responsibilities:
- Load YAML config/inventory.yml
- Validate it against the bundled schema (schemas/config_schema.json)
- Apply defaults (header_row=1, header_language=es)
- Let INVENTORY_RULES_FILE override `rules_file` (set directly or via .env)
"""

__all__ = [
    "CONFIG_SCHEMA_PATH",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "RULES_FILE_ENV",
    "load_config",
]

CONFIG_SCHEMA_PATH = Path(__file__).parent / "schemas" / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/inventory.yml")
RULES_FILE_ENV = "INVENTORY_RULES_FILE"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If any of the following occurs:
            - The schema file does not exist.
            - The schema file is not valid JSON.
            - The config data fails schema validation (missing source_directory,
              unknown keys, wrong types, unsupported header language).
    """
    if not CONFIG_SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {CONFIG_SCHEMA_PATH}")

    try:
        schema = json.loads(CONFIG_SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    rules_file = os.getenv(RULES_FILE_ENV) or data.get("rules_file")
    return AppConfig(
        source_directory=data["source_directory"],
        rules_file=rules_file,
        sheet_name=data.get("sheet_name"),
        header_row=data.get("header_row", 1),
        output_directory=data.get("output_directory"),
        header_language=data.get("header_language", "es"),
    )
