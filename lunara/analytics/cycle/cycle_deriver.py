"""Per-cycle and per-period lengths from an ordered period history."""

from __future__ import annotations

from typing import Sequence

from lunara.analytics.cycle.dates import whole_days
from lunara.analytics.records import PeriodRecord


def derive_cycle_lengths(history: Sequence[PeriodRecord]) -> list[int]:
    """Days between each start date and the next.

    Args:
        history: Records sorted ascending by start date.

    Returns:
        ``len(history) - 1`` lengths, oldest cycle first.  Empty for fewer
        than two records.
    """
    return [
        whole_days(current.start_date, following.start_date)
        for current, following in zip(history, history[1:])
    ]


def derive_period_lengths(history: Sequence[PeriodRecord]) -> list[int]:
    """Inclusive day span of every period that has an end date.

    A period starting and ending on the same day has length 1.  Records
    without an end date are skipped.
    """
    return [
        whole_days(record.start_date, record.end_date) + 1
        for record in history
        if record.end_date is not None
    ]
