"""Cookie and crumb session cache for the Yahoo Finance endpoints."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Tuple

import requests
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_URL = "https://fc.yahoo.com"
DEFAULT_CRUMB_URL = "https://query2.finance.yahoo.com/v1/test/getcrumb"
DEFAULT_USER_AGENT = "Mozilla/5.0"
DEFAULT_TTL_SECONDS = 600.0


class AuthSession(BaseModel):
    """Crumb and cookie pair issued by the provider."""

    model_config = ConfigDict(frozen=True)

    crumb: str
    cookie: str
    issued_at: float

    def is_valid(self, now: float, ttl_seconds: float) -> bool:
        return now - self.issued_at < ttl_seconds


def _set_cookie_values(response: requests.Response) -> List[str]:
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return list(raw_headers.getlist("Set-Cookie"))
    header = response.headers.get("Set-Cookie")
    return [header] if header else []


def join_cookies(set_cookie_values: List[str]) -> str:
    """Keep the ``name=value`` part of each ``Set-Cookie`` value and join them with ``"; "``."""

    return "; ".join(value.split(";", 1)[0].strip() for value in set_cookie_values)


class CrumbAuthCache:
    """Memoizes one :class:`AuthSession` until it ages out or is invalidated.

    No lock guards the slot: concurrent misses may each run a handshake and
    the last one to finish wins.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        cookie_url: str = DEFAULT_COOKIE_URL,
        crumb_url: str = DEFAULT_CRUMB_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        timeout: Tuple[float, float] = (5.0, 10.0),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._session = session or requests.Session()
        self._cookie_url = cookie_url
        self._crumb_url = crumb_url
        self._user_agent = user_agent
        self._ttl_seconds = ttl_seconds
        self._timeout = timeout
        self._clock = clock
        self._cached: Optional[AuthSession] = None

    @property
    def cached(self) -> Optional[AuthSession]:
        return self._cached

    def get(self) -> AuthSession:
        """Return the cached session, running a fresh handshake when it is missing or expired."""

        cached = self._cached
        if cached is not None and cached.is_valid(self._clock(), self._ttl_seconds):
            logger.debug("Reusing crumb issued at %.0f", cached.issued_at)
            return cached

        logger.info("Starting provider handshake")
        cookie = self._fetch_cookie()
        crumb = self._fetch_crumb(cookie)
        fresh = AuthSession(crumb=crumb, cookie=cookie, issued_at=self._clock())
        self._cached = fresh
        return fresh

    def invalidate(self) -> None:
        if self._cached is not None:
            logger.warning("Invalidating cached crumb")
        self._cached = None

    def _fetch_cookie(self) -> str:
        response = self._session.get(
            self._cookie_url,
            headers={"User-Agent": self._user_agent},
            allow_redirects=False,
            timeout=self._timeout,
        )
        return join_cookies(_set_cookie_values(response))

    def _fetch_crumb(self, cookie: str) -> str:
        response = self._session.get(
            self._crumb_url,
            headers={"User-Agent": self._user_agent, "Cookie": cookie},
            timeout=self._timeout,
        )
        return response.text


__all__ = ["AuthSession", "CrumbAuthCache", "join_cookies"]
