"""Top-by-volume contract ranking with a volume vs. open interest classification."""

from __future__ import annotations

from typing import List

from options_flow.models import ChainSnapshot, NotableTrade, TradeType

from .rounding import round_to_int

CONTRACT_MULTIPLIER = 100
DEFAULT_LIMIT = 15


def classify_trade(volume: int, open_interest: int) -> TradeType:
    """Label a contract by how far its volume runs past resting open interest."""

    baseline = max(open_interest, 1)
    if volume > 2 * baseline:
        return "sweep"
    if volume > baseline:
        return "unusual"
    return "active"


def rank_notable_trades(snapshot: ChainSnapshot, limit: int = DEFAULT_LIMIT) -> List[NotableTrade]:
    """Return up to ``limit`` traded contracts, highest volume first.

    Calls come before puts and the sort is stable, so equal volumes keep
    the provider's listing order.
    """

    frame = snapshot.to_dataframe()
    traded = frame[frame["volume"] > 0]
    top = traded.sort_values("volume", ascending=False, kind="stable").head(max(limit, 0))

    expiry = snapshot.expiry_label
    trades: List[NotableTrade] = []
    for row in top.itertuples(index=False):
        volume = int(row.volume)
        open_interest = int(row.openInterest)
        trades.append(
            NotableTrade(
                strike=float(row.strike),
                expiry=expiry,
                option_type=row.type,
                premium=round_to_int(float(row.lastPrice) * volume * CONTRACT_MULTIPLIER),
                trade_type=classify_trade(volume, open_interest),
                volume=volume,
                open_interest=open_interest,
                iv=round_to_int(float(row.impliedVolatility) * 100),
                last_price=float(row.lastPrice),
            )
        )
    return trades


__all__ = ["CONTRACT_MULTIPLIER", "DEFAULT_LIMIT", "classify_trade", "rank_notable_trades"]
