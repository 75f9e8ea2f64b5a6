"""Environment aware configuration loader for the flow service."""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_SETTINGS: Dict[str, Any] = {
    "adapter": {
        "provider": "yahoo",
    },
    "provider": {
        "user_agent": "Mozilla/5.0",
        "cookie_url": "https://fc.yahoo.com",
        "crumb_url": "https://query2.finance.yahoo.com/v1/test/getcrumb",
        "options_url": "https://query2.finance.yahoo.com/v7/finance/options/{symbol}",
        "connect_timeout": 5.0,
        "read_timeout": 10.0,
        "chain_read_timeout": 15.0,
    },
    "auth": {
        "ttl_seconds": 600,
    },
    "flow": {
        "notable_limit": 15,
    },
    "logging": {
        "level": "INFO",
    },
}

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"
ENVIRONMENT_VARIABLE = "APP_ENV"


class AdapterSettings(BaseModel):
    provider: str = "yahoo"


class ProviderSettings(BaseModel):
    """Endpoints and outbound timeouts for the quote provider."""

    user_agent: str = "Mozilla/5.0"
    cookie_url: str = "https://fc.yahoo.com"
    crumb_url: str = "https://query2.finance.yahoo.com/v1/test/getcrumb"
    options_url: str = "https://query2.finance.yahoo.com/v7/finance/options/{symbol}"
    connect_timeout: float = 5.0
    read_timeout: float = 10.0
    chain_read_timeout: float = 15.0

    @field_validator("connect_timeout", "read_timeout", "chain_read_timeout")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeouts must be positive")
        return value

    @property
    def handshake_timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)

    @property
    def chain_timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.chain_read_timeout)


class AuthSettings(BaseModel):
    ttl_seconds: int = 600


class FlowSettings(BaseModel):
    notable_limit: int = 15


class LoggingSettings(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()


class AppSettings(BaseModel):
    """Fully resolved application settings loaded from YAML."""

    model_config = ConfigDict(frozen=True)

    env: str
    adapter: AdapterSettings
    provider: ProviderSettings
    auth: AuthSettings
    flow: FlowSettings
    logging: LoggingSettings

    @field_validator("env")
    @classmethod
    def _normalize_env(cls, value: str) -> str:
        return value.strip().lower()


def _deep_merge(base: MutableMapping[str, Any], overrides: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, Mapping):
            existing = base.get(key)
            if isinstance(existing, MutableMapping):
                base[key] = _deep_merge(copy.deepcopy(existing), value)
            else:
                base[key] = copy.deepcopy(value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle.read()) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping at the root.")
        return data


def _build_settings(env: str) -> AppSettings:
    config_path = CONFIG_DIR / f"{env}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file for environment '{env}' not found at {config_path}")

    merged = copy.deepcopy(DEFAULT_SETTINGS)
    overrides = _load_yaml(config_path)
    merged = _deep_merge(merged, overrides)
    merged["env"] = env
    return AppSettings.model_validate(merged)


@lru_cache(maxsize=None)
def _cached_settings(env: str) -> AppSettings:
    return _build_settings(env)


def get_settings(env: Optional[str] = None) -> AppSettings:
    """Load settings for the requested environment (default: APP_ENV or 'dev')."""

    resolved_env = (env or os.getenv(ENVIRONMENT_VARIABLE, "dev")).strip().lower()
    return _cached_settings(resolved_env)


def reset_settings_cache() -> None:
    """Clear the cached settings, primarily used during tests."""

    _cached_settings.cache_clear()


__all__ = [
    "AdapterSettings",
    "AppSettings",
    "AuthSettings",
    "FlowSettings",
    "LoggingSettings",
    "ProviderSettings",
    "get_settings",
    "reset_settings_cache",
]
