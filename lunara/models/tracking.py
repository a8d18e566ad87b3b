"""Pydantic models for the records users log: periods and moods."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from pydantic import Field, field_validator, model_validator

from lunara.analytics.records import MAX_INTENSITY, MIN_INTENSITY, Mood
from lunara.models.base import LunaraBase, TimestampMixin


def _reject_null(value: Any) -> Any:
    """Omitting a field leaves it unchanged; an explicit null is an error
    for columns that cannot be empty."""
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


# ---------- Periods ----------

class PeriodBase(LunaraBase):
    start_date: date
    end_date: date | None = None
    symptoms: list[str] = Field(default_factory=list)
    notes: str | None = None

    @model_validator(mode="after")
    def _end_not_before_start(self) -> PeriodBase:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class PeriodCreate(PeriodBase):
    pass


class PeriodUpdate(LunaraBase):
    start_date: date | None = None
    end_date: date | None = None
    symptoms: list[str] | None = None
    notes: str | None = None

    @field_validator("start_date", "symptoms")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class PeriodRead(PeriodBase, TimestampMixin):
    period_id: uuid.UUID
    user_id: uuid.UUID


# ---------- Moods ----------

class MoodBase(LunaraBase):
    mood_date: date = Field(default_factory=date.today)
    mood: Mood
    intensity: int | None = Field(default=None, ge=MIN_INTENSITY, le=MAX_INTENSITY)
    notes: str | None = None


class MoodCreate(MoodBase):
    pass


class MoodUpdate(LunaraBase):
    mood_date: date | None = None
    mood: Mood | None = None
    intensity: int | None = Field(default=None, ge=MIN_INTENSITY, le=MAX_INTENSITY)
    notes: str | None = None

    @field_validator("mood_date", "mood")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        return _reject_null(value)


class MoodRead(MoodBase):
    mood_id: uuid.UUID
    user_id: uuid.UUID
