from __future__ import annotations

import pytest

from options_flow.analysis import classify_sentiment, summarize_flow


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [
        (0.0, "bullish"),
        (0.69, "bullish"),
        (0.7, "neutral"),
        (1.0, "neutral"),
        (1.2, "neutral"),
        (1.21, "bearish"),
        (3.0, "bearish"),
    ],
)
def test_classify_sentiment_thresholds(ratio, expected):
    assert classify_sentiment(ratio) == expected


def test_zero_volume_defaults_to_even_split(make_snapshot):
    snapshot = make_snapshot(
        calls=[{"strike": 100, "openInterest": 500}],
        puts=[{"strike": 100, "openInterest": 300}],
    )

    summary = summarize_flow(snapshot)

    assert summary.volume == 0
    assert (summary.call_pct, summary.put_pct) == (50.0, 50.0)
    assert summary.pc_ratio == 1.0
    assert summary.sentiment == "neutral"
    assert summary.volume_avg_ratio == 0.0
    assert (summary.total_call_oi, summary.total_put_oi) == (500, 300)


def test_empty_chain_summary(make_snapshot):
    summary = summarize_flow(make_snapshot())

    assert summary.volume == 0
    assert (summary.call_pct, summary.put_pct, summary.sentiment) == (50.0, 50.0, "neutral")


def test_totals_and_ratios(make_snapshot):
    snapshot = make_snapshot(
        calls=[
            {"strike": 100, "volume": 400, "openInterest": 1000},
            {"strike": 105, "volume": 200, "openInterest": 500},
        ],
        puts=[{"strike": 95, "volume": 300, "openInterest": 1500}],
    )

    summary = summarize_flow(snapshot)

    assert summary.total_call_vol == 600
    assert summary.total_put_vol == 300
    assert summary.volume == 900
    assert summary.total_call_oi == 1500
    assert summary.total_put_oi == 1500
    assert summary.call_pct == 66.7
    assert summary.put_pct == 33.3
    assert summary.pc_ratio == 0.5
    assert summary.sentiment == "bullish"
    assert summary.volume_avg_ratio == 0.3


def test_puts_without_calls_are_neutral_ratio(make_snapshot):
    snapshot = make_snapshot(puts=[{"strike": 95, "volume": 50}])

    summary = summarize_flow(snapshot)

    assert summary.pc_ratio == 1.0
    assert summary.sentiment == "neutral"
    assert (summary.call_pct, summary.put_pct) == (0.0, 100.0)
    assert summary.volume_avg_ratio == 50.0


def test_bearish_when_puts_dominate(make_snapshot):
    snapshot = make_snapshot(
        calls=[{"strike": 100, "volume": 100}],
        puts=[{"strike": 100, "volume": 125}],
    )

    summary = summarize_flow(snapshot)

    assert summary.pc_ratio == 1.25
    assert summary.sentiment == "bearish"


def test_percentages_sum_to_hundred(make_snapshot):
    snapshot = make_snapshot(
        calls=[{"strike": 100, "volume": 1}],
        puts=[{"strike": 100, "volume": 3}],
    )

    summary = summarize_flow(snapshot)

    assert summary.call_pct + summary.put_pct == pytest.approx(100.0)


def test_rounded_percentages_still_sum_to_hundred(make_snapshot):
    # 0.25% / 99.75% would round to 0.3 / 99.8 independently.
    snapshot = make_snapshot(
        calls=[{"strike": 100, "volume": 1}],
        puts=[{"strike": 100, "volume": 399}],
    )

    summary = summarize_flow(snapshot)

    assert (summary.call_pct, summary.put_pct) == (0.3, 99.7)
    assert summary.call_pct + summary.put_pct == pytest.approx(100.0)
