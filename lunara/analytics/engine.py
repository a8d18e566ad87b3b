"""Public operations of the cycle & mood analytics engine.

Every function here is pure and synchronous: it takes one user's records as
already loaded by the caller and returns computed results.  Nothing is read
from or written to storage, and "today" is always passed in explicitly.

Usage::

    from lunara.analytics.engine import compute_cycle_stats, classify_today

    stats = compute_cycle_stats(periods)       # may raise NotEnoughDataError
    status = classify_today(periods, date.today())
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from lunara.analytics.config_loader import AnalyticsConfig, get_analytics_config
from lunara.analytics.cycle.cycle_deriver import derive_cycle_lengths, derive_period_lengths
from lunara.analytics.cycle.day_classifier import CycleDayClassifier
from lunara.analytics.cycle.period_history import sort_period_history
from lunara.analytics.cycle.predictor import predict_next_period
from lunara.analytics.cycle.stats_aggregator import average_lengths, require_enough_history
from lunara.analytics.errors import NotEnoughDataError
from lunara.analytics.mood import mood_aggregator
from lunara.analytics.records import (
    CurrentCycleStatus,
    CycleStats,
    MonthlyMoodStats,
    MoodRecord,
    PeriodRecord,
)

logger = logging.getLogger("lunara.analytics.engine")


def compute_cycle_stats(
    period_records: Iterable[PeriodRecord],
    config: AnalyticsConfig | None = None,
) -> CycleStats:
    """Derive cycle statistics and a next-period prediction.

    Args:
        period_records: One user's period records, in any order.
        config:         Override config (defaults to the global singleton).

    Raises:
        RecordValidationError: If a record has no start date or ends before it starts.
        NotEnoughDataError:    If fewer than two records are supplied.
    """
    cfg = config or get_analytics_config()
    history = sort_period_history(period_records)
    require_enough_history(len(history), cfg.cycle_stats.min_period_records)

    cycles = derive_cycle_lengths(history)
    period_lengths = derive_period_lengths(history)
    avg_cycle, avg_period = average_lengths(cycles, period_lengths)

    stats = CycleStats(
        cycles=cycles,
        period_lengths=period_lengths,
        avg_cycle_length=avg_cycle,
        avg_period_length=avg_period,
        next_period=predict_next_period(history[-1].start_date, avg_cycle, avg_period),
    )
    logger.debug(
        "Cycle stats from %d record(s): avg_cycle=%d avg_period=%d",
        len(history),
        avg_cycle,
        avg_period,
    )
    return stats


def classify_today(
    period_records: Iterable[PeriodRecord],
    today: date,
    config: AnalyticsConfig | None = None,
) -> CurrentCycleStatus | None:
    """Classify ``today`` as Period, Fertile or Regular.

    Uses the latest record by start date and the averages from
    :func:`compute_cycle_stats`, so both views always agree.

    Returns:
        The status, or None when the history is too short to classify.

    Raises:
        RecordValidationError: If a record is malformed.
    """
    cfg = config or get_analytics_config()
    history = sort_period_history(period_records)
    if not history:
        return None

    try:
        stats = compute_cycle_stats(history, cfg)
    except NotEnoughDataError:
        logger.debug("Cannot classify %s: only %d period record(s)", today, len(history))
        return None

    return CycleDayClassifier(cfg).classify(
        today=today,
        last_start=history[-1].start_date,
        avg_cycle_length=stats.avg_cycle_length,
        avg_period_length=stats.avg_period_length,
    )


def aggregate_moods_by_month(mood_records: Iterable[MoodRecord]) -> MonthlyMoodStats:
    """Monthly mood distribution keyed by ``YYYY-MM``.

    Records are validated when constructed (see :class:`MoodRecord`), so a
    well-formed iterable never fails here.
    """
    return mood_aggregator.aggregate_moods_by_month(mood_records)
