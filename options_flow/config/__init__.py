"""Configuration helpers for the flow service and CLI."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from options_flow.adapters import OptionsDataAdapter, create_adapter

from .loader import AppSettings, get_settings, reset_settings_cache

DEFAULT_OPTIONS_PROVIDER = "yahoo"


@lru_cache(maxsize=None)
def _get_options_data_adapter(provider: Optional[str], env: Optional[str]) -> OptionsDataAdapter:
    settings = get_settings(env)
    name = (provider or os.getenv("OPTIONS_DATA_PROVIDER") or settings.adapter.provider).strip().lower()
    try:
        return create_adapter(name, settings)
    except KeyError as exc:
        raise ValueError(f"Unsupported options data provider: {name}") from exc


def get_options_data_adapter(provider: Optional[str] = None, env: Optional[str] = None) -> OptionsDataAdapter:
    """Return a shared options data adapter instance based on configuration."""

    return _get_options_data_adapter(provider, env)


def reset_options_data_adapter_cache() -> None:
    """Clear the cached adapter instance (useful for tests)."""

    _get_options_data_adapter.cache_clear()


__all__ = [
    "AppSettings",
    "DEFAULT_OPTIONS_PROVIDER",
    "get_options_data_adapter",
    "get_settings",
    "reset_settings_cache",
    "reset_options_data_adapter_cache",
]
