"""wom_sync configuration helpers."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from wom_sync.paths import repo_file

logger = logging.getLogger(__name__)

ENV_PREFIX = "WOM_"
CONFIG_FILE = "config.yaml"


@dataclass
class Settings:
    api_base_url: str = "https://api.wiseoldman.net/v2"
    site_base_url: str = "https://wiseoldman.net"
    group_id: int = 141
    hunt_competition_id: int | None = 100262
    period_seconds: float = 420.0
    initial_delay_seconds: float = 0.0
    connect_timeout: float = 5.0
    read_timeout: float = 20.0
    stop_grace_seconds: float = 30.0
    store_path: str = "flux_config.db"

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


_FIELD_TYPES: dict[str, type] = {
    "api_base_url": str,
    "site_base_url": str,
    "group_id": int,
    "hunt_competition_id": int,
    "period_seconds": float,
    "initial_delay_seconds": float,
    "connect_timeout": float,
    "read_timeout": float,
    "stop_grace_seconds": float,
    "store_path": str,
}

_OPTIONAL_FIELDS = {"hunt_competition_id"}


def _coerce(key: str, value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        if key in _OPTIONAL_FIELDS:
            return None
        raise ValueError(f"Missing value for setting '{key}'")
    caster = _FIELD_TYPES[key]
    try:
        coerced = caster(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for setting '{key}': {value!r}") from exc
    if caster is float and coerced < 0:
        raise ValueError(f"Setting '{key}' must not be negative: {value!r}")
    return coerced


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = path or repo_file(CONFIG_FILE)
    if not config_path.is_file():
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping, got %s", config_path, type(data).__name__)
        return {}
    return data


def settings_from_mapping(data: dict[str, Any], base: Settings | None = None) -> Settings:
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _FIELD_TYPES:
            logger.warning("Ignoring unknown setting '%s'", key)
            continue
        values[key] = _coerce(key, value)
    return dataclasses.replace(base or Settings(), **values)


def settings_from_environment(base: Settings) -> Settings:
    values: dict[str, Any] = {}
    for key in _FIELD_TYPES:
        raw = os.getenv(ENV_PREFIX + key.upper())
        if raw is None:
            continue
        values[key] = _coerce(key, raw)
    return dataclasses.replace(base, **values)


def load_settings(config_path: Path | None = None) -> Settings:
    """Defaults, then config.yaml, then WOM_* environment variables (.env included)."""
    load_dotenv()
    settings = settings_from_mapping(load_config_file(config_path))
    return settings_from_environment(settings)
