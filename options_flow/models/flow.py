from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .option import Expiration

Sentiment = Literal["bullish", "bearish", "neutral"]
TradeType = Literal["sweep", "unusual", "active"]


class FlowSummary(BaseModel):
    """Aggregate volume and open interest statistics for a chain."""

    volume: int
    volume_avg_ratio: float
    call_pct: float
    put_pct: float
    pc_ratio: float
    sentiment: Sentiment
    total_call_vol: int
    total_put_vol: int
    total_call_oi: int
    total_put_oi: int


class NotableTrade(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    strike: float
    expiry: str
    option_type: Literal["call", "put"] = Field(alias="type")
    premium: int
    trade_type: TradeType
    volume: int
    open_interest: int = Field(alias="openInterest")
    iv: int
    last_price: float = Field(alias="lastPrice")


class KeyLevels(BaseModel):
    max_pain: float
    highest_oi_call: float
    highest_oi_put: float


class FlowReport(BaseModel):
    """Full analytics payload returned for one ticker and expiration."""

    ticker: str
    price: float
    change: float
    expiry: str
    expirations: List[Expiration] = Field(default_factory=list)
    summary: FlowSummary
    notable_trades: List[NotableTrade] = Field(default_factory=list)
    key_levels: KeyLevels


class FlowRequest(BaseModel):
    # Kept loose so validation can answer with the same error payload as other failures.
    ticker: Optional[Any] = None
    expiration: Optional[int] = None


class FlowResponse(BaseModel):
    data: FlowReport


class ErrorResponse(BaseModel):
    error: str
