"""Adapter implementations for external options data providers."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Dict, Optional, Type

from .base import OptionsDataAdapter

if TYPE_CHECKING:  # pragma: no cover
    from options_flow.config.loader import AppSettings

_ADAPTER_REGISTRY: Dict[str, str] = {
    "yahoo": "options_flow.adapters.yahoo:YahooOptionsDataAdapter",
}


def create_adapter(provider: str, settings: Optional["AppSettings"] = None) -> OptionsDataAdapter:
    """Instantiate an options data adapter by name.

    Args:
        provider: The lowercase name of the provider to load.
        settings: Resolved application settings; adapter defaults are used when omitted.

    Returns:
        An instance of the requested adapter implementation.

    Raises:
        KeyError: If the provider name is unknown.
    """

    normalized = provider.lower()
    try:
        dotted_path = _ADAPTER_REGISTRY[normalized]
    except KeyError as exc:
        raise KeyError(f"Unknown options data provider: {provider}") from exc

    module_name, class_name = dotted_path.split(":", 1)
    module = import_module(module_name)
    adapter_cls: Type[OptionsDataAdapter] = getattr(module, class_name)
    if settings is None:
        return adapter_cls()
    return adapter_cls.from_settings(settings)


__all__ = ["OptionsDataAdapter", "create_adapter"]
