"""YAML config loader with environment overrides and dotted-key lookup."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from skycast.config.schema import AppConfig

API_KEY_ENV_VARS = ("OPENWEATHER_API_KEY", "WEATHER_API_KEY")


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load and validate config from an optional YAML file.

    A missing or empty file yields defaults. The API key is taken from the
    first non-empty variable in API_KEY_ENV_VARS, overriding the file.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    env = os.environ if environ is None else environ
    for name in API_KEY_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            raw.setdefault("api", {})["api_key"] = value
            break

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def masked_config_json(config: AppConfig) -> str:
    """Dump config as JSON with the API key replaced by a placeholder."""
    data = json.loads(config.model_dump_json())
    if data["api"]["api_key"]:
        data["api"]["api_key"] = "***"
    return json.dumps(data, indent=2)
