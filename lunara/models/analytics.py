"""Response models for the analytics endpoints.

These mirror the engine's result dataclasses and are built from them with
``model_validate`` (``from_attributes`` is on in ``LunaraBase``).
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from lunara.analytics.records import CycleStatus, Mood
from lunara.models.base import LunaraBase


class NextPeriodRead(LunaraBase):
    predicted_start_date: date
    predicted_end_date: date


class CycleStatsRead(LunaraBase):
    cycles: list[int]
    period_lengths: list[int]
    avg_cycle_length: int
    avg_period_length: int
    next_period: NextPeriodRead | None = None


class CurrentCycleStatusRead(LunaraBase):
    day_in_cycle: int
    status: CycleStatus
    message: str


class MonthlyMoodSummaryRead(LunaraBase):
    mood_counts: dict[Mood, int] = Field(default_factory=dict)
    total_entries: int
    avg_intensity: float
