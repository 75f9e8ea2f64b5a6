"""Core abstractions for options data adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from options_flow.models import ChainSnapshot

if TYPE_CHECKING:  # pragma: no cover
    from options_flow.config.loader import AppSettings


class InvalidTicker(ValueError):
    """Raised when a request carries a missing or blank ticker."""


class AdapterError(Exception):
    """Base exception raised for adapter related failures."""


class ProviderUnavailable(AdapterError):
    """Raised when the provider answers with a non-success status or cannot be reached."""

    def __init__(self, ticker: str) -> None:
        super().__init__(f"Failed to fetch options for {ticker}")
        self.ticker = ticker


class DataNotAvailable(AdapterError):
    """Raised when requested data is not available from a provider."""

    def __init__(self, ticker: str) -> None:
        super().__init__(f"No options data for {ticker}")
        self.ticker = ticker


def normalize_ticker(ticker: Any) -> str:
    """Return the trimmed, upper-cased ticker or raise :class:`InvalidTicker`."""

    if not isinstance(ticker, str) or not ticker.strip():
        raise InvalidTicker("Ticker required")
    return ticker.strip().upper()


class OptionsDataAdapter(ABC):
    """Abstract base class for fetching options data from external providers."""

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "OptionsDataAdapter":
        """Build the adapter from application settings (defaults unless overridden)."""

        return cls()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable provider name."""

    @abstractmethod
    def get_chain(self, symbol: str, expiration: Optional[int] = None) -> ChainSnapshot:
        """Return the chain for a symbol, pinned to ``expiration`` (unix seconds) when given."""


__all__ = [
    "AdapterError",
    "DataNotAvailable",
    "InvalidTicker",
    "OptionsDataAdapter",
    "ProviderUnavailable",
    "normalize_ticker",
]
