from __future__ import annotations

from typing import Any, List, Literal

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONTRACT_COLUMNS = [
    "type",
    "contractSymbol",
    "strike",
    "lastPrice",
    "bid",
    "ask",
    "volume",
    "openInterest",
    "impliedVolatility",
    "expiration",
    "inTheMoney",
]


class OptionContract(BaseModel):
    """Single listed contract as reported by the quote provider."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    option_type: Literal["call", "put"] = Field(alias="type")
    contract_symbol: str = Field(default="", alias="contractSymbol")
    strike: float = 0.0
    last_price: float = Field(default=0.0, alias="lastPrice")
    bid: float = 0.0
    ask: float = 0.0
    volume: int = 0
    open_interest: int = Field(default=0, alias="openInterest")
    implied_volatility: float = Field(default=0.0, alias="impliedVolatility")
    expiration: int = 0
    in_the_money: bool = Field(default=False, alias="inTheMoney")

    @field_validator("volume", "open_interest", "expiration", mode="before")
    @classmethod
    def coerce_int(cls, value: Any) -> int:
        return int(value or 0)

    @field_validator("implied_volatility", "last_price", "bid", "ask", "strike", mode="before")
    @classmethod
    def coerce_float(cls, value: Any) -> float:
        return float(value or 0.0)

    @field_validator("contract_symbol", mode="before")
    @classmethod
    def coerce_str(cls, value: Any) -> str:
        return str(value or "")

    @field_validator("in_the_money", mode="before")
    @classmethod
    def coerce_bool(cls, value: Any) -> bool:
        return bool(value)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Expiration(BaseModel):
    """Available expiration date with a short display label."""

    model_config = ConfigDict(frozen=True)

    ts: int
    label: str


class ChainSnapshot(BaseModel):
    """Normalized, immutable view of one expiration of an options chain."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    underlying_price: float = 0.0
    underlying_change_pct: float = 0.0
    expiration: int = 0
    expirations: List[Expiration] = Field(default_factory=list)
    calls: List[OptionContract] = Field(default_factory=list)
    puts: List[OptionContract] = Field(default_factory=list)

    @field_validator("underlying_price", "underlying_change_pct", mode="before")
    @classmethod
    def coerce_float(cls, value: Any) -> float:
        return float(value or 0.0)

    @property
    def expiry_label(self) -> str:
        """Expiration rendered as ``MM/DD`` in UTC."""

        return pd.Timestamp(self.expiration, unit="s", tz="UTC").strftime("%m/%d")

    def to_dataframe(self) -> pd.DataFrame:
        """Combine calls and puts into a single frame, calls first, provider order kept."""

        records = [contract.to_record() for contract in (*self.calls, *self.puts)]
        if not records:
            return pd.DataFrame(columns=CONTRACT_COLUMNS)
        return pd.DataFrame.from_records(records, columns=CONTRACT_COLUMNS)
