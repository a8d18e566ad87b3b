"""CRUD endpoints for period entries, plus cycle statistics and today's status."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any

import asyncpg
from fastapi import APIRouter, HTTPException, Query

from lunara.analytics.engine import classify_today, compute_cycle_stats
from lunara.analytics.errors import NotEnoughDataError, RecordValidationError
from lunara.analytics.records import PeriodRecord
from lunara.dependencies import CurrentUser
from lunara.models.analytics import CurrentCycleStatusRead, CycleStatsRead
from lunara.models.tracking import PeriodCreate, PeriodRead, PeriodUpdate
from lunara.services.database import execute, fetch, fetchrow

router = APIRouter(prefix="/periods", tags=["periods"])
logger = logging.getLogger("lunara.routers.periods")


async def _load_period_records(user_id: uuid.UUID) -> list[PeriodRecord]:
    rows = await fetch(
        "SELECT * FROM periods WHERE user_id = $1",
        user_id,
        user_id=user_id,
    )
    return [PeriodRecord.from_row(dict(r)) for r in rows]


@router.get("", response_model=list[PeriodRead])
async def list_periods(user: CurrentUser) -> Any:
    rows = await fetch(
        "SELECT * FROM periods WHERE user_id = $1 ORDER BY start_date DESC",
        user.user_id,
        user_id=user.user_id,
    )
    return [dict(r) for r in rows]


@router.post("", response_model=PeriodRead, status_code=201)
async def create_period(user: CurrentUser, body: PeriodCreate) -> Any:
    row = await fetchrow(
        """
        INSERT INTO periods (period_id, user_id, start_date, end_date, symptoms, notes)
        VALUES (gen_random_uuid(), $1, $2, $3, $4, $5)
        RETURNING *
        """,
        user.user_id, body.start_date, body.end_date, body.symptoms, body.notes,
        user_id=user.user_id,
    )
    return dict(row)


@router.get("/stats/cycle", response_model=CycleStatsRead)
async def cycle_stats(user: CurrentUser) -> Any:
    records = await _load_period_records(user.user_id)
    try:
        stats = compute_cycle_stats(records)
    except NotEnoughDataError:
        raise HTTPException(
            status_code=400, detail="Not enough period data to calculate stats"
        )
    except RecordValidationError as exc:
        logger.error("Stored period data for %s is inconsistent: %s", user.user_id, exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return CycleStatsRead.model_validate(stats)


@router.get("/status/today", response_model=CurrentCycleStatusRead | None)
async def status_today(
    user: CurrentUser,
    today: date | None = Query(default=None, description="Defaults to the server's date"),
) -> Any:
    records = await _load_period_records(user.user_id)
    try:
        status = classify_today(records, today or date.today())
    except RecordValidationError as exc:
        logger.error("Stored period data for %s is inconsistent: %s", user.user_id, exc)
        raise HTTPException(status_code=422, detail=str(exc))
    if status is None:
        return None
    return CurrentCycleStatusRead.model_validate(status)


@router.get("/{period_id}", response_model=PeriodRead)
async def get_period(period_id: uuid.UUID, user: CurrentUser) -> Any:
    row = await fetchrow(
        "SELECT * FROM periods WHERE period_id = $1 AND user_id = $2",
        period_id, user.user_id,
        user_id=user.user_id,
    )
    if not row:
        raise HTTPException(status_code=404, detail="Period not found")
    return dict(row)


@router.patch("/{period_id}", response_model=PeriodRead)
async def update_period(period_id: uuid.UUID, user: CurrentUser, body: PeriodUpdate) -> Any:
    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    set_clauses = []
    params: list[Any] = [period_id, user.user_id]
    for i, (key, value) in enumerate(updates.items(), start=3):
        set_clauses.append(f"{key} = ${i}")
        params.append(value)

    try:
        row = await fetchrow(
            f"""
            UPDATE periods SET {', '.join(set_clauses)}
            WHERE period_id = $1 AND user_id = $2
            RETURNING *
            """,
            *params,
            user_id=user.user_id,
        )
    except asyncpg.CheckViolationError:
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")
    if not row:
        raise HTTPException(status_code=404, detail="Period not found")
    return dict(row)


@router.delete("/{period_id}", status_code=204)
async def delete_period(period_id: uuid.UUID, user: CurrentUser) -> None:
    result = await execute(
        "DELETE FROM periods WHERE period_id = $1 AND user_id = $2",
        period_id, user.user_id,
        user_id=user.user_id,
    )
    if result == "DELETE 0":
        raise HTTPException(status_code=404, detail="Period not found")
