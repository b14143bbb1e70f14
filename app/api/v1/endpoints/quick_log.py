"""Quick log: one exercise with weight, sets and reps, outside any session."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.db.session import get_db
from app.models.quick_log import QuickWorkout
from app.schemas.quick_log import QuickWorkoutCreate, QuickWorkoutRead

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[QuickWorkoutRead])
async def list_quick_workouts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Logged entries, newest first."""
    result = await db.execute(
        select(QuickWorkout)
        .where(QuickWorkout.user_id == user_id)
        .order_by(QuickWorkout.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(result.scalars().all())


@router.post("", response_model=QuickWorkoutRead, status_code=201)
async def create_quick_workout(
    payload: QuickWorkoutCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    exercise = payload.exercise.strip()
    if not exercise:
        raise HTTPException(status_code=400, detail="Exercise name is required.")
    entry = QuickWorkout(user_id=user_id, **{**payload.model_dump(), "exercise": exercise})
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    logger.info("Logged %s (%dx%d @ %s kg)", exercise, entry.sets, entry.reps, entry.weight)
    return entry
