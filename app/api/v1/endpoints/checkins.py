"""Calendar check-ins: mark or unmark a day as a workout day."""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.db.session import get_db
from app.models.checkin import WorkoutCheckin
from app.schemas.checkin import CheckinState, CheckinToggle

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[date])
async def list_checkins(
    from_date: date | None = None,
    to_date: date | None = None,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Checked-in dates, ascending, optionally limited to a date range."""
    stmt = select(WorkoutCheckin.date).where(WorkoutCheckin.user_id == user_id)
    if from_date:
        stmt = stmt.where(WorkoutCheckin.date >= from_date)
    if to_date:
        stmt = stmt.where(WorkoutCheckin.date <= to_date)
    result = await db.execute(stmt.order_by(WorkoutCheckin.date))
    return list(result.scalars().all())


@router.post("/toggle", response_model=CheckinState)
async def toggle_checkin(
    payload: CheckinToggle,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Unmark the day if it is checked in, otherwise mark it."""
    result = await db.execute(
        select(WorkoutCheckin).where(
            WorkoutCheckin.user_id == user_id, WorkoutCheckin.date == payload.date
        )
    )
    existing = result.scalar_one_or_none()
    if existing:
        await db.delete(existing)
        checked_in = False
    else:
        db.add(WorkoutCheckin(user_id=user_id, date=payload.date))
        checked_in = True
    await db.flush()
    logger.info("Check-in %s for %s: %s", payload.date, user_id, checked_in)
    return CheckinState(date=payload.date, checked_in=checked_in)


@router.delete("/{checkin_date}", status_code=204)
async def delete_checkin(
    checkin_date: date,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Remove a check-in. Removing a day that is not checked in is a no-op."""
    await db.execute(
        delete(WorkoutCheckin).where(
            WorkoutCheckin.user_id == user_id, WorkoutCheckin.date == checkin_date
        )
    )
    logger.info("Removed check-in %s for %s", checkin_date, user_id)
    return None
