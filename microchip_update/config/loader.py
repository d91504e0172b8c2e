from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import OrganizationConfig, RunConfig

"""YAML config loader.

Responsibilities:
- Load the YAML run configuration (config/microchip_update.yml by default)
- Validate it against the packaged config_schema.json (unknown keys rejected)
- Apply defaults for every key left out
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "default_config",
    "load_config",
    "resolve_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

# Environment variable naming the config file; relative to the working directory otherwise
CONFIG_ENV_VAR = "MICROCHIP_UPDATE_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "microchip_update.yml"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: The schema file is missing or unreadable, or the data
            fails validation (wrong types, unknown keys, bad layout names)
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


def default_config() -> RunConfig:
    return RunConfig()


def load_config(path: Path) -> RunConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = RunConfig()
    org_raw = data.get("organization", {})
    org_defaults = OrganizationConfig()
    organization = OrganizationConfig(
        **{
            name: str(org_raw.get(name, getattr(org_defaults, name)))
            for name in OrganizationConfig.__dataclass_fields__
        }
    )
    return RunConfig(
        cutoff_year=data.get("cutoff_year", defaults.cutoff_year),
        old_layout=data.get("old_layout", defaults.old_layout),
        new_layout=data.get("new_layout", defaults.new_layout),
        default_state=data.get("default_state", defaults.default_state),
        audit_missing_microchips=data.get("audit_missing_microchips", defaults.audit_missing_microchips),
        organization=organization,
    )


def resolve_config(explicit: Path | None = None) -> RunConfig:
    """Find and load the run configuration.

    An explicit path must exist. Otherwise the file named by
    MICROCHIP_UPDATE_CONFIG is used, then config/microchip_update.yml if it is
    there; with neither, the built-in defaults apply.
    """
    if explicit is not None:
        return load_config(explicit)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()
