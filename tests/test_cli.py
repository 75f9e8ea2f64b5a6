from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from options_flow import cli
from options_flow.adapters.base import DataNotAvailable, InvalidTicker, ProviderUnavailable


@pytest.fixture
def adapter(monkeypatch):
    stub = MagicMock()
    monkeypatch.setattr(cli, "get_options_data_adapter", lambda env=None: stub)
    return stub


def test_json_output(adapter, make_snapshot, capsys):
    adapter.get_chain.return_value = make_snapshot(
        calls=[{"strike": 100, "volume": 20, "openInterest": 10}],
        puts=[{"strike": 95, "volume": 10, "openInterest": 30}],
    )

    exit_code = cli.main(["aapl", "--json", "--env", "dev"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["data"]["summary"]["pc_ratio"] == 0.5
    adapter.get_chain.assert_called_once_with("aapl", None)


def test_table_output(adapter, make_snapshot, capsys):
    adapter.get_chain.return_value = make_snapshot(calls=[{"strike": 100, "volume": 20}])

    assert cli.main(["AAPL", "--expiration", "1742515200", "--env", "dev"]) == 0

    out = capsys.readouterr().out
    assert "Max pain 100" in out
    assert "sweep" in out
    adapter.get_chain.assert_called_once_with("AAPL", 1742515200)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (InvalidTicker("Ticker required"), cli.EXIT_INVALID_TICKER),
        (DataNotAvailable("AAPL"), cli.EXIT_NO_DATA),
        (ProviderUnavailable("AAPL"), cli.EXIT_PROVIDER_UNAVAILABLE),
    ],
)
def test_failures_map_to_exit_codes(adapter, error, code, capsys):
    adapter.get_chain.side_effect = error

    assert cli.main(["AAPL", "--env", "dev"]) == code
    assert str(error) in capsys.readouterr().out
