"""Adapter fetching option chains straight from Yahoo Finance's v7 options endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests
from pydantic import ValidationError

from options_flow.models import ChainSnapshot, Expiration, OptionContract

from .auth import DEFAULT_USER_AGENT, CrumbAuthCache
from .base import DataNotAvailable, OptionsDataAdapter, ProviderUnavailable, normalize_ticker

if TYPE_CHECKING:  # pragma: no cover
    from options_flow.config.loader import AppSettings

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_URL = "https://query2.finance.yahoo.com/v7/finance/options/{symbol}"


def format_expiration_label(ts: int) -> str:
    """Render an expiration like ``Mar 21, 25`` (UTC)."""

    moment = datetime.fromtimestamp(ts, tz=timezone.utc)
    return f"{moment.strftime('%b')} {moment.day}, {moment.strftime('%y')}"


def _parse_contracts(rows: Optional[List[Dict[str, Any]]], option_type: str) -> List[OptionContract]:
    contracts: List[OptionContract] = []
    for row in rows or []:
        contracts.append(OptionContract.model_validate({**row, "type": option_type}))
    return contracts


def _parse_timestamps(raw: Optional[List[Any]]) -> List[int]:
    # Null or non-numeric entries are dropped.
    parsed: List[int] = []
    for value in raw or []:
        if isinstance(value, bool):
            continue
        try:
            parsed.append(int(value))
        except (TypeError, ValueError, OverflowError):
            continue
    return parsed


def parse_chain_payload(symbol: str, payload: Dict[str, Any]) -> ChainSnapshot:
    """Build a :class:`ChainSnapshot` from a raw ``optionChain`` response.

    Only the first (selected) expiration block is used. Raises
    :class:`DataNotAvailable` when the provider lists no options.
    """

    results = (payload.get("optionChain") or {}).get("result") or []
    result = results[0] if results else None
    if not result or not result.get("options"):
        raise DataNotAvailable(symbol)

    quote_data = result.get("quote") or {}
    block = result["options"][0] or {}
    selected = _parse_timestamps([block.get("expirationDate")])
    expirations = [
        Expiration(ts=ts, label=format_expiration_label(ts))
        for ts in _parse_timestamps(result.get("expirationDates"))
    ]

    return ChainSnapshot(
        ticker=symbol,
        underlying_price=quote_data.get("regularMarketPrice"),
        underlying_change_pct=quote_data.get("regularMarketChangePercent"),
        expiration=selected[0] if selected else 0,
        expirations=expirations,
        calls=_parse_contracts(block.get("calls"), "call"),
        puts=_parse_contracts(block.get("puts"), "put"),
    )


class YahooOptionsDataAdapter(OptionsDataAdapter):
    """Fetch option chains from Yahoo Finance using a cached cookie/crumb session.

    A non-success status invalidates the cached crumb so the next request
    re-authenticates; the failing request itself is not retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        auth: Optional[CrumbAuthCache] = None,
        *,
        options_url: str = DEFAULT_OPTIONS_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Tuple[float, float] = (5.0, 15.0),
    ) -> None:
        self._session = session or requests.Session()
        self._auth = auth or CrumbAuthCache(self._session, user_agent=user_agent)
        self._options_url = options_url
        self._user_agent = user_agent
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "YahooOptionsDataAdapter":
        provider = settings.provider
        session = requests.Session()
        auth = CrumbAuthCache(
            session,
            cookie_url=provider.cookie_url,
            crumb_url=provider.crumb_url,
            user_agent=provider.user_agent,
            ttl_seconds=settings.auth.ttl_seconds,
            timeout=provider.handshake_timeout,
        )
        return cls(
            session,
            auth,
            options_url=provider.options_url,
            user_agent=provider.user_agent,
            timeout=provider.chain_timeout,
        )

    @property
    def name(self) -> str:
        return "yahoo"

    @property
    def auth(self) -> CrumbAuthCache:
        return self._auth

    def get_chain(self, symbol: str, expiration: Optional[int] = None) -> ChainSnapshot:
        ticker = normalize_ticker(symbol)

        try:
            auth = self._auth.get()
            params: Dict[str, Any] = {"crumb": auth.crumb}
            if expiration:
                params["date"] = expiration
            response = self._session.get(
                self._options_url.format(symbol=quote(ticker, safe="")),
                params=params,
                headers={"User-Agent": self._user_agent, "Cookie": auth.cookie},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Transport failure fetching options for %s: %s", ticker, exc)
            raise ProviderUnavailable(ticker) from exc

        if not response.ok:
            logger.warning("Options fetch for %s returned HTTP %s", ticker, response.status_code)
            self._auth.invalidate()
            raise ProviderUnavailable(ticker)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Options response for %s is not valid JSON", ticker)
            raise ProviderUnavailable(ticker) from exc

        try:
            snapshot = parse_chain_payload(ticker, payload)
        except ValidationError as exc:
            logger.warning("Malformed option contracts for %s: %s", ticker, exc)
            raise ProviderUnavailable(ticker) from exc

        logger.info(
            "Fetched %d calls / %d puts for %s expiring %s",
            len(snapshot.calls),
            len(snapshot.puts),
            ticker,
            snapshot.expiry_label,
        )
        return snapshot


__all__ = [
    "DEFAULT_OPTIONS_URL",
    "YahooOptionsDataAdapter",
    "format_expiration_label",
    "parse_chain_payload",
]
