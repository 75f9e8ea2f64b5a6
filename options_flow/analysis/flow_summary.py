"""Call/put volume and open interest aggregation with a put/call sentiment read."""

from __future__ import annotations

import pandas as pd

from options_flow.models import ChainSnapshot, FlowSummary, Sentiment

from .rounding import round_half_up

BULLISH_RATIO = 0.7
BEARISH_RATIO = 1.2


def classify_sentiment(pc_ratio: float) -> Sentiment:
    """Map a put/call volume ratio onto a sentiment label.

    Below 0.7 is bullish, above 1.2 is bearish and anything in between
    (bounds included) is neutral.
    """

    if pc_ratio < BULLISH_RATIO:
        return "bullish"
    if pc_ratio > BEARISH_RATIO:
        return "bearish"
    return "neutral"


def _side_total(frame: pd.DataFrame, side: str, column: str) -> int:
    return int(frame.loc[frame["type"] == side, column].sum())


def summarize_flow(snapshot: ChainSnapshot) -> FlowSummary:
    frame = snapshot.to_dataframe()

    total_call_vol = _side_total(frame, "call", "volume")
    total_put_vol = _side_total(frame, "put", "volume")
    total_call_oi = _side_total(frame, "call", "openInterest")
    total_put_oi = _side_total(frame, "put", "openInterest")
    total_vol = total_call_vol + total_put_vol

    if total_vol > 0:
        call_pct = round_half_up(total_call_vol / total_vol * 100, 1)
        # Complement of the rounded call share keeps the pair summing to 100.
        put_pct = round_half_up(100 - call_pct, 1)
        volume_avg_ratio = round_half_up(total_vol / max(total_call_oi + total_put_oi, 1), 1)
    else:
        call_pct = put_pct = 50.0
        volume_avg_ratio = 0.0

    pc_ratio = total_put_vol / total_call_vol if total_call_vol > 0 else 1.0

    return FlowSummary(
        volume=total_vol,
        volume_avg_ratio=volume_avg_ratio,
        call_pct=call_pct,
        put_pct=put_pct,
        pc_ratio=round_half_up(pc_ratio, 2),
        sentiment=classify_sentiment(pc_ratio),
        total_call_vol=total_call_vol,
        total_put_vol=total_put_vol,
        total_call_oi=total_call_oi,
        total_put_oi=total_put_oi,
    )


__all__ = ["BEARISH_RATIO", "BULLISH_RATIO", "classify_sentiment", "summarize_flow"]
