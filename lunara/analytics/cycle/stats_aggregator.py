"""Reduce derived cycle and period lengths to rounded averages."""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Sequence

from lunara.analytics.errors import NotEnoughDataError


def rounded_mean(values: Sequence[int]) -> int:
    """Arithmetic mean rounded to the nearest integer, halves away from zero.

    The mean is computed exactly, so 28.5 always rounds to 29 and -2.5 to -3
    (built-in ``round`` would give 28 and -2).  An empty sequence yields 0.
    """
    if not values:
        return 0
    mean = Fraction(sum(values), len(values))
    magnitude = math.floor(abs(mean) + Fraction(1, 2))
    return magnitude if mean >= 0 else -magnitude


def require_enough_history(record_count: int, minimum: int = 2) -> None:
    """Raise NotEnoughDataError unless ``record_count`` reaches ``minimum``.

    Two period records are the least that yield one cycle length.
    """
    if record_count < minimum:
        raise NotEnoughDataError(record_count, required=minimum)


def average_lengths(cycles: Sequence[int], period_lengths: Sequence[int]) -> tuple[int, int]:
    """Return ``(avg_cycle_length, avg_period_length)``."""
    return rounded_mean(cycles), rounded_mean(period_lengths)
