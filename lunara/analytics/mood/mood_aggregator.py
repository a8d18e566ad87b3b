"""Bucket mood records by calendar month."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date
from typing import Iterable

from lunara.analytics.records import MonthlyMoodStats, MonthlyMoodSummary, MoodRecord


def month_key(value: date) -> str:
    """``YYYY-MM`` key for the month containing ``value``.

    Keys sort chronologically as plain strings.
    """
    return f"{value.year:04d}-{value.month:02d}"


def aggregate_moods_by_month(records: Iterable[MoodRecord]) -> MonthlyMoodStats:
    """Count moods per month and average the logged intensities.

    Every record counts towards ``total_entries`` and ``mood_counts``; only
    records with an intensity count towards ``avg_intensity``, which is 0.0
    for a month where none was logged.
    """
    by_month: dict[str, list[MoodRecord]] = defaultdict(list)
    for record in records:
        by_month[month_key(record.date)].append(record)

    stats: MonthlyMoodStats = {}
    for key, month_records in by_month.items():
        intensities = [r.intensity for r in month_records if r.intensity is not None]
        stats[key] = MonthlyMoodSummary(
            mood_counts=dict(Counter(r.mood for r in month_records)),
            total_entries=len(month_records),
            avg_intensity=sum(intensities) / len(intensities) if intensities else 0.0,
        )
    return stats
