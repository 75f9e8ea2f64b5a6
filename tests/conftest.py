from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from options_flow.models import ChainSnapshot, Expiration, OptionContract

# 2025-03-21 00:00:00 UTC
EXPIRY_TS = 1742515200


def contract(option_type: str, strike: float, **fields: Any) -> OptionContract:
    return OptionContract.model_validate({"type": option_type, "strike": strike, **fields})


@pytest.fixture
def make_snapshot() -> Callable[..., ChainSnapshot]:
    def _make(
        calls: Optional[List[Dict[str, Any]]] = None,
        puts: Optional[List[Dict[str, Any]]] = None,
        price: float = 100.0,
        ticker: str = "AAPL",
    ) -> ChainSnapshot:
        return ChainSnapshot(
            ticker=ticker,
            underlying_price=price,
            underlying_change_pct=1.25,
            expiration=EXPIRY_TS,
            expirations=[Expiration(ts=EXPIRY_TS, label="Mar 21, 25")],
            calls=[contract("call", **row) for row in calls or []],
            puts=[contract("put", **row) for row in puts or []],
        )

    return _make


def make_response(status_code: int = 200, payload: Any = None, text: str = "", cookies: Optional[List[str]] = None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.json.return_value = payload
    response.raw.headers.getlist.return_value = list(cookies or [])
    return response


def chain_payload(calls: Optional[List[Dict[str, Any]]] = None, puts: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {
        "optionChain": {
            "result": [
                {
                    "quote": {"regularMarketPrice": 101.5, "regularMarketChangePercent": -0.8},
                    "expirationDates": [EXPIRY_TS, EXPIRY_TS + 7 * 86400],
                    "options": [
                        {
                            "expirationDate": EXPIRY_TS,
                            "calls": calls if calls is not None else [],
                            "puts": puts if puts is not None else [],
                        }
                    ],
                }
            ],
            "error": None,
        }
    }


class FakeProvider:
    """Routes ``session.get`` calls to cookie, crumb and chain responses."""

    cookie_url = "https://fc.yahoo.com"
    crumb_url = "https://query2.finance.yahoo.com/v1/test/getcrumb"

    def __init__(self, chain_responses: Optional[List[Any]] = None) -> None:
        self.chain_responses = list(chain_responses or [])
        self.handshakes = 0
        self.chain_calls: List[Dict[str, Any]] = []
        self.session = MagicMock()
        self.session.get.side_effect = self._get

    def _get(self, url: str, **kwargs: Any):
        if url == self.cookie_url:
            self.handshakes += 1
            return make_response(cookies=[f"A3=token{self.handshakes}; Path=/; Domain=.yahoo.com", "B=xyz; Secure"])
        if url == self.crumb_url:
            return make_response(text=f"crumb-{self.handshakes}")
        self.chain_calls.append({"url": url, **kwargs})
        outcome = self.chain_responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def payload_factory() -> Callable[..., Dict[str, Any]]:
    return chain_payload


@pytest.fixture
def response_factory() -> Callable[..., Any]:
    return make_response
