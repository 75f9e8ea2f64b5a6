"""Compose the per-request flow report from a chain snapshot."""

from __future__ import annotations

from options_flow.models import ChainSnapshot, FlowReport

from .flow_summary import summarize_flow
from .max_pain import find_key_levels
from .notable_trades import DEFAULT_LIMIT, rank_notable_trades


def build_flow_report(snapshot: ChainSnapshot, notable_limit: int = DEFAULT_LIMIT) -> FlowReport:
    return FlowReport(
        ticker=snapshot.ticker,
        price=snapshot.underlying_price,
        change=snapshot.underlying_change_pct,
        expiry=snapshot.expiry_label,
        expirations=list(snapshot.expirations),
        summary=summarize_flow(snapshot),
        notable_trades=rank_notable_trades(snapshot, limit=notable_limit),
        key_levels=find_key_levels(snapshot),
    )


__all__ = ["build_flow_report"]
