from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from csvdesk.models.config_models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_OPTIONS,
    AppConfig,
    Team,
)

"""Config loader.

Responsibilities:
- Load the YAML config file (config/teams.yml by default)
- Validate it against config_schema.json shipped next to this module
- Check the cross-field rules the schema cannot express (unique team keys,
  default page size among the offered options)
- Apply defaults (page_size=50, page_size_options=[10, 25, 50, 100])
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
    "parse_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/teams.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (missing required keys, wrong
            types, extra properties).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path)
        suffix = f" (at {location})" if location else ""
        raise ConfigError(f"config validation failed: {e.message}{suffix}") from e


def parse_config(data: Any) -> AppConfig:
    """Build an AppConfig from already-decoded YAML/JSON data."""
    _validate_config_schema(data)

    teams: list[Team] = []
    seen: set[str] = set()
    for raw in data["teams"]:
        key = raw["key"]
        if key in seen:
            raise ConfigError(f"duplicate team key: {key}")
        seen.add(key)
        teams.append(Team(key=key, name=raw["name"], ids=tuple(raw["ids"])))

    page_size = data.get("page_size", DEFAULT_PAGE_SIZE)
    options = tuple(data.get("page_size_options", DEFAULT_PAGE_SIZE_OPTIONS))
    if page_size not in options:
        raise ConfigError(f"page_size {page_size} is not one of page_size_options {list(options)}")

    return AppConfig(teams=tuple(teams), page_size=page_size, page_size_options=options)


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return parse_config(data)
