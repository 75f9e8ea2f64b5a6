"""Max pain strike and open interest key levels."""

from __future__ import annotations

import math
from typing import List, NamedTuple, Sequence

import numpy as np

from options_flow.models import ChainSnapshot, KeyLevels, OptionContract


class _OpenInterest(NamedTuple):
    strike_cents: np.ndarray
    open_interest: np.ndarray


def _to_cents(strike: float) -> int:
    return int(round(strike * 100))


def _open_interest(contracts: Sequence[OptionContract]) -> _OpenInterest:
    return _OpenInterest(
        np.array([_to_cents(c.strike) for c in contracts], dtype=np.int64),
        np.array([c.open_interest for c in contracts], dtype=np.int64),
    )


def _pain_at(strike_cents: int, calls: _OpenInterest, puts: _OpenInterest) -> int:
    # Cents of intrinsic value times OI times the 100 multiplier, over 100 cents, is whole dollars.
    call_pain = np.where(strike_cents > calls.strike_cents, strike_cents - calls.strike_cents, 0) * calls.open_interest
    put_pain = np.where(strike_cents < puts.strike_cents, puts.strike_cents - strike_cents, 0) * puts.open_interest
    return int(call_pain.sum()) + int(put_pain.sum())


def candidate_strikes(snapshot: ChainSnapshot) -> List[float]:
    """Ascending, de-duplicated union of every call and put strike."""

    return sorted({contract.strike for contract in (*snapshot.calls, *snapshot.puts)})


def writer_pain(strike: float, calls: Sequence[OptionContract], puts: Sequence[OptionContract]) -> int:
    """Aggregate intrinsic value, in dollars, option writers owe if the underlying settles at ``strike``."""

    return _pain_at(_to_cents(strike), _open_interest(calls), _open_interest(puts))


def calculate_max_pain(snapshot: ChainSnapshot) -> float:
    """Return the strike with the lowest writer pain.

    Strikes are scanned in ascending order and only a strictly lower pain
    replaces the running minimum, so the lowest strike wins a tie. Pain is
    summed in integer cents so equal pains compare equal. An empty chain
    falls back to the underlying price.
    """

    calls = _open_interest(snapshot.calls)
    puts = _open_interest(snapshot.puts)

    max_pain_strike = snapshot.underlying_price
    min_pain = math.inf
    for strike in candidate_strikes(snapshot):
        pain = _pain_at(_to_cents(strike), calls, puts)
        if pain < min_pain:
            min_pain = pain
            max_pain_strike = strike
    return max_pain_strike


def highest_open_interest_strike(contracts: Sequence[OptionContract]) -> float:
    # First listed contract wins ties.
    if not contracts:
        return 0.0
    best = contracts[0]
    for contract in contracts[1:]:
        if contract.open_interest > best.open_interest:
            best = contract
    return best.strike


def find_key_levels(snapshot: ChainSnapshot) -> KeyLevels:
    return KeyLevels(
        max_pain=calculate_max_pain(snapshot),
        highest_oi_call=highest_open_interest_strike(snapshot.calls),
        highest_oi_put=highest_open_interest_strike(snapshot.puts),
    )


__all__ = [
    "calculate_max_pain",
    "candidate_strikes",
    "find_key_levels",
    "highest_open_interest_strike",
    "writer_pain",
]
