"""CRUD endpoints for mood entries, plus monthly mood statistics."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, HTTPException

from lunara.analytics.engine import aggregate_moods_by_month
from lunara.analytics.records import Mood, MoodRecord
from lunara.dependencies import CurrentUser
from lunara.models.analytics import MonthlyMoodSummaryRead
from lunara.models.tracking import MoodCreate, MoodRead, MoodUpdate
from lunara.services.database import execute, fetch, fetchrow

router = APIRouter(prefix="/moods", tags=["moods"])


@router.get("", response_model=list[MoodRead])
async def list_moods(user: CurrentUser) -> Any:
    rows = await fetch(
        "SELECT * FROM moods WHERE user_id = $1 ORDER BY mood_date DESC",
        user.user_id,
        user_id=user.user_id,
    )
    return [dict(r) for r in rows]


@router.post("", response_model=MoodRead, status_code=201)
async def create_mood(user: CurrentUser, body: MoodCreate) -> Any:
    row = await fetchrow(
        """
        INSERT INTO moods (mood_id, user_id, mood_date, mood, intensity, notes)
        VALUES (gen_random_uuid(), $1, $2, $3, $4, $5)
        RETURNING *
        """,
        user.user_id, body.mood_date, body.mood.value, body.intensity, body.notes,
        user_id=user.user_id,
    )
    return dict(row)


@router.get("/stats/monthly", response_model=dict[str, MonthlyMoodSummaryRead])
async def monthly_stats(user: CurrentUser) -> Any:
    rows = await fetch(
        "SELECT * FROM moods WHERE user_id = $1",
        user.user_id,
        user_id=user.user_id,
    )
    stats = aggregate_moods_by_month(MoodRecord.from_row(dict(r)) for r in rows)
    return {
        month: MonthlyMoodSummaryRead.model_validate(summary)
        for month, summary in sorted(stats.items())
    }


@router.get("/{mood_id}", response_model=MoodRead)
async def get_mood(mood_id: uuid.UUID, user: CurrentUser) -> Any:
    row = await fetchrow(
        "SELECT * FROM moods WHERE mood_id = $1 AND user_id = $2",
        mood_id, user.user_id,
        user_id=user.user_id,
    )
    if not row:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    return dict(row)


@router.patch("/{mood_id}", response_model=MoodRead)
async def update_mood(mood_id: uuid.UUID, user: CurrentUser, body: MoodUpdate) -> Any:
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    set_clauses = []
    params: list[Any] = [mood_id, user.user_id]
    for i, (key, value) in enumerate(updates.items(), start=3):
        set_clauses.append(f"{key} = ${i}")
        params.append(value.value if isinstance(value, Mood) else value)

    row = await fetchrow(
        f"""
        UPDATE moods SET {', '.join(set_clauses)}
        WHERE mood_id = $1 AND user_id = $2
        RETURNING *
        """,
        *params,
        user_id=user.user_id,
    )
    if not row:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    return dict(row)


@router.delete("/{mood_id}", status_code=204)
async def delete_mood(mood_id: uuid.UUID, user: CurrentUser) -> None:
    result = await execute(
        "DELETE FROM moods WHERE mood_id = $1 AND user_id = $2",
        mood_id, user.user_id,
        user_id=user.user_id,
    )
    if result == "DELETE 0":
        raise HTTPException(status_code=404, detail="Mood entry not found")
