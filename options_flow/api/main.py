"""FastAPI application exposing the options flow analytics."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from options_flow.adapters.base import (
    DataNotAvailable,
    InvalidTicker,
    OptionsDataAdapter,
    ProviderUnavailable,
    normalize_ticker,
)
from options_flow.analysis import build_flow_report
from options_flow.config import get_options_data_adapter, get_settings
from options_flow.models import FlowRequest, FlowResponse, serialize_error, serialize_flow_response

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Options Flow Analytics API", version="1.0.0")


def get_options_adapter() -> OptionsDataAdapter:
    """Shared adapter, and with it the cached provider session, for the process."""

    return get_options_data_adapter()


def get_notable_limit() -> int:
    return get_settings().flow.notable_limit


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    logging.getLogger("options_flow").setLevel(settings.logging.level)
    logger.info("Starting flow API (env=%s, provider=%s)", settings.env, settings.adapter.provider)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("Shutting down flow API")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=serialize_error(message))


@app.exception_handler(InvalidTicker)
async def _invalid_ticker(request: Request, exc: InvalidTicker) -> JSONResponse:
    return _error(400, str(exc))


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "Invalid request body")


@app.exception_handler(DataNotAvailable)
async def _no_data(request: Request, exc: DataNotAvailable) -> JSONResponse:
    return _error(404, str(exc))


@app.exception_handler(ProviderUnavailable)
async def _provider_unavailable(request: Request, exc: ProviderUnavailable) -> JSONResponse:
    return _error(502, str(exc))


@app.exception_handler(Exception)
async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while building options flow")
    return _error(500, str(exc) or "Options fetch failed")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/agents/flow", response_model=FlowResponse)
def options_flow(
    payload: FlowRequest,
    adapter: OptionsDataAdapter = Depends(get_options_adapter),
    notable_limit: int = Depends(get_notable_limit),
) -> Dict[str, Any]:
    """Fetch a ticker's chain and return flow summary, notable trades and key levels."""

    ticker = normalize_ticker(payload.ticker)
    snapshot = adapter.get_chain(ticker, payload.expiration)
    report = build_flow_report(snapshot, notable_limit=notable_limit)
    return serialize_flow_response(report)


__all__ = ["app", "get_notable_limit", "get_options_adapter"]
