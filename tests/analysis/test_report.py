from __future__ import annotations

from options_flow.analysis import build_flow_report
from options_flow.models import serialize_flow_response


def test_report_wire_shape(make_snapshot):
    snapshot = make_snapshot(
        calls=[{"strike": 100, "volume": 250, "openInterest": 100, "lastPrice": 2.0, "impliedVolatility": 0.3}],
        puts=[{"strike": 110, "volume": 50, "openInterest": 5, "lastPrice": 1.0}],
        price=104.0,
    )

    payload = serialize_flow_response(build_flow_report(snapshot))

    data = payload["data"]
    assert set(data) == {
        "ticker",
        "price",
        "change",
        "expiry",
        "expirations",
        "summary",
        "notable_trades",
        "key_levels",
    }
    assert data["ticker"] == "AAPL"
    assert data["price"] == 104.0
    assert data["change"] == 1.25
    assert data["expiry"] == "03/21"
    assert data["expirations"] == [{"ts": 1742515200, "label": "Mar 21, 25"}]
    assert set(data["summary"]) == {
        "volume",
        "volume_avg_ratio",
        "call_pct",
        "put_pct",
        "pc_ratio",
        "sentiment",
        "total_call_vol",
        "total_put_vol",
        "total_call_oi",
        "total_put_oi",
    }
    assert data["notable_trades"][0] == {
        "strike": 100.0,
        "expiry": "03/21",
        "type": "call",
        "premium": 50000,
        "trade_type": "sweep",
        "volume": 250,
        "openInterest": 100,
        "iv": 30,
        "lastPrice": 2.0,
    }
    assert data["notable_trades"][1]["trade_type"] == "sweep"
    assert data["key_levels"] == {"max_pain": 100.0, "highest_oi_call": 100.0, "highest_oi_put": 110.0}


def test_report_respects_notable_limit(make_snapshot):
    snapshot = make_snapshot(calls=[{"strike": 100 + i, "volume": 10 + i} for i in range(20)])

    report = build_flow_report(snapshot, notable_limit=3)

    assert len(report.notable_trades) == 3
    assert report.summary.volume == sum(10 + i for i in range(20))
