"""Cycle & mood analytics engine for Lunara.

Pure computation over one user's period and mood records.  Storage, HTTP
and authentication live outside this package; callers load the records and
pass them in.

Modules:
    engine        - compute_cycle_stats, classify_today, aggregate_moods_by_month
    records       - Input records and result dataclasses
    errors        - RecordValidationError, NotEnoughDataError
    config_loader - Load/validate/hot-reload analytics_config.yaml
    cycle/        - Period history ordering, lengths, averages, prediction, day status
    mood/         - Monthly mood aggregation
"""

from lunara.analytics.engine import (
    aggregate_moods_by_month,
    classify_today,
    compute_cycle_stats,
)
from lunara.analytics.errors import AnalyticsError, NotEnoughDataError, RecordValidationError
from lunara.analytics.records import (
    CurrentCycleStatus,
    CycleStats,
    CycleStatus,
    MonthlyMoodSummary,
    Mood,
    MoodRecord,
    NextPeriodPrediction,
    PeriodRecord,
)

__all__ = [
    "compute_cycle_stats",
    "classify_today",
    "aggregate_moods_by_month",
    "AnalyticsError",
    "NotEnoughDataError",
    "RecordValidationError",
    "CurrentCycleStatus",
    "CycleStats",
    "CycleStatus",
    "MonthlyMoodSummary",
    "Mood",
    "MoodRecord",
    "NextPeriodPrediction",
    "PeriodRecord",
]
