"""Half-up rounding used for every displayed figure."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals with halves going towards +infinity.

    ``round()`` rounds halves to even, which would turn a 2.5 premium into 2.
    """

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_to_int(value: float) -> int:
    return int(math.floor(value + 0.5))


__all__ = ["round_half_up", "round_to_int"]
