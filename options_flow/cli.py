"""Command line interface printing the flow report for one ticker."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Sequence

import pandas as pd

from options_flow.adapters.base import DataNotAvailable, InvalidTicker, ProviderUnavailable
from options_flow.analysis import build_flow_report
from options_flow.config import get_options_data_adapter, get_settings
from options_flow.models import FlowReport, serialize_flow_response

LOGGER = logging.getLogger("options_flow.cli")

EXIT_INVALID_TICKER = 2
EXIT_NO_DATA = 3
EXIT_PROVIDER_UNAVAILABLE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize options flow for a ticker")
    parser.add_argument("ticker", help="Underlying symbol, e.g. AAPL")
    parser.add_argument(
        "--expiration",
        type=int,
        default=None,
        help="Expiration as unix seconds (defaults to the provider's nearest expiry)",
    )
    parser.add_argument("--env", type=str, default=None, help="Config environment (defaults to APP_ENV or dev)")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON payload")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _display(report: FlowReport) -> None:
    summary = report.summary
    levels = report.key_levels
    print(f"{report.ticker}  ${report.price:.2f} ({report.change:+.2f}%)  expiry {report.expiry}")
    print(
        f"Volume {summary.volume:,}  calls {summary.call_pct}% / puts {summary.put_pct}%  "
        f"P/C {summary.pc_ratio}  {summary.sentiment.upper()}  vol/OI {summary.volume_avg_ratio}x"
    )
    print(
        f"Max pain {levels.max_pain:g}  highest OI call {levels.highest_oi_call:g}  "
        f"highest OI put {levels.highest_oi_put:g}"
    )

    if not report.notable_trades:
        print("No traded contracts.")
        return
    frame = pd.DataFrame([trade.model_dump(by_alias=True) for trade in report.notable_trades])
    columns = ["type", "strike", "expiry", "volume", "openInterest", "premium", "trade_type", "iv", "lastPrice"]
    with pd.option_context("display.max_columns", None, "display.width", 160):
        print(frame[columns].to_string(index=False))


def run_from_args(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings(args.env)
    _configure_logging(settings.logging.level)
    adapter = get_options_data_adapter(env=args.env)

    LOGGER.info("Fetching options flow for %s (expiration=%s)", args.ticker, args.expiration)
    try:
        snapshot = adapter.get_chain(args.ticker, args.expiration)
    except InvalidTicker as exc:
        print(str(exc))
        return EXIT_INVALID_TICKER
    except DataNotAvailable as exc:
        print(str(exc))
        return EXIT_NO_DATA
    except ProviderUnavailable as exc:
        print(str(exc))
        return EXIT_PROVIDER_UNAVAILABLE

    report = build_flow_report(snapshot, notable_limit=settings.flow.notable_limit)
    if args.json:
        print(json.dumps(serialize_flow_response(report), indent=2))
    else:
        _display(report)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run_from_args(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
