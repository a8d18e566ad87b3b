"""Input records and result types for the analytics engine.

Records are plain dataclasses built by the service layer from one user's
stored rows.  The engine only reads them.  Results are dataclasses too; the
API layer converts them into its pydantic response models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping
from uuid import UUID

from lunara.analytics.errors import RecordValidationError

MIN_INTENSITY = 1
MAX_INTENSITY = 10


class Mood(str, Enum):
    happy = "happy"
    sad = "sad"
    angry = "angry"
    anxious = "anxious"
    calm = "calm"
    energetic = "energetic"
    tired = "tired"
    irritable = "irritable"


class CycleStatus(str, Enum):
    period = "Period"
    fertile = "Fertile"
    regular = "Regular"


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass
class PeriodRecord:
    """One logged period.

    Attributes:
        start_date: First day of bleeding.  Required; a record without it is
                    rejected when the history is built.
        end_date:   Last day of bleeding, if the user logged it.
        period_id:  Storage identity.
        user_id:    Owning user.
        symptoms:   Symptom tags in the order the user entered them.
        notes:      Free text.
        created_at: When the record was stored.
    """

    start_date: date | None
    end_date: date | None = None
    period_id: UUID | None = None
    user_id: UUID | None = None
    symptoms: list[str] = field(default_factory=list)
    notes: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> PeriodRecord:
        return cls(
            start_date=row.get("start_date"),
            end_date=row.get("end_date"),
            period_id=row.get("period_id"),
            user_id=row.get("user_id"),
            symptoms=list(row.get("symptoms") or []),
            notes=row.get("notes"),
            created_at=row.get("created_at"),
        )


@dataclass
class MoodRecord:
    """One logged mood.

    ``mood`` accepts either a :class:`Mood` or its string value; anything
    outside the fixed set raises :class:`RecordValidationError`.
    """

    date: date
    mood: Mood
    intensity: int | None = None
    mood_id: UUID | None = None
    user_id: UUID | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.date is None:
            raise RecordValidationError("Mood record is missing its date")
        try:
            self.mood = Mood(self.mood)
        except ValueError as exc:
            raise RecordValidationError(
                f"Unknown mood {self.mood!r}; expected one of "
                f"{', '.join(m.value for m in Mood)}"
            ) from exc
        if self.intensity is None:
            return
        if isinstance(self.intensity, bool) or not isinstance(self.intensity, int):
            raise RecordValidationError(
                f"Mood intensity must be a whole number, got {self.intensity!r}"
            )
        if not (
            MIN_INTENSITY <= self.intensity <= MAX_INTENSITY
        ):
            raise RecordValidationError(
                f"Mood intensity {self.intensity} is out of range "
                f"[{MIN_INTENSITY}, {MAX_INTENSITY}]"
            )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> MoodRecord:
        return cls(
            date=row.get("mood_date"),
            mood=row.get("mood"),
            intensity=row.get("intensity"),
            mood_id=row.get("mood_id"),
            user_id=row.get("user_id"),
            notes=row.get("notes"),
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class NextPeriodPrediction:
    predicted_start_date: date
    predicted_end_date: date


@dataclass
class CycleStats:
    """Statistics derived from a user's period history.

    Attributes:
        cycles:            Days between consecutive start dates, oldest first.
        period_lengths:    Inclusive day span of each period with an end date.
        avg_cycle_length:  Rounded mean of ``cycles`` (0 if empty).
        avg_period_length: Rounded mean of ``period_lengths`` (0 if empty).
        next_period:       Projected next period, or None without a basis.
    """

    cycles: list[int] = field(default_factory=list)
    period_lengths: list[int] = field(default_factory=list)
    avg_cycle_length: int = 0
    avg_period_length: int = 0
    next_period: NextPeriodPrediction | None = None


@dataclass
class CurrentCycleStatus:
    day_in_cycle: int
    status: CycleStatus
    message: str


@dataclass
class MonthlyMoodSummary:
    mood_counts: dict[Mood, int] = field(default_factory=dict)
    total_entries: int = 0
    avg_intensity: float = 0.0


MonthlyMoodStats = dict[str, MonthlyMoodSummary]
