"""Derived analytics computed over a single chain snapshot."""

from .flow_summary import classify_sentiment, summarize_flow
from .max_pain import calculate_max_pain, find_key_levels, highest_open_interest_strike
from .notable_trades import classify_trade, rank_notable_trades
from .report import build_flow_report

__all__ = [
    "build_flow_report",
    "calculate_max_pain",
    "classify_sentiment",
    "classify_trade",
    "find_key_levels",
    "highest_open_interest_strike",
    "rank_notable_trades",
    "summarize_flow",
]
