"""Statistics: personal records, weekly/monthly summary and per-exercise progression."""

from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.core.enums import SummaryPeriod
from app.db.session import get_db
from app.models.session import SessionExercise, WorkoutSession
from app.schemas.stats import PeriodSummary, PersonalRecord, ProgressionPoint, ProgressionSeries
from app.services.session_queries import load_personal_records, load_user_sessions
from app.services.workout_stats import progression_series, summarize_period

router = APIRouter()


@router.get("/records", response_model=list[PersonalRecord])
async def personal_records(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Heaviest set weight per exercise name across all sessions."""
    prs = await load_personal_records(db, user_id)
    return [
        PersonalRecord(exercise_name=name, weight=weight)
        for name, weight in sorted(prs.items(), key=lambda kv: (kv[0].lower(), kv[0]))
    ]


@router.get("/summary", response_model=PeriodSummary)
async def period_summary(
    period: SummaryPeriod = SummaryPeriod.WEEK,
    reference_date: date | None = Query(None, description="Any day inside the period; defaults to today"),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """
    Workouts, distinct training days, heaviest set, set count and most frequent muscle group
    for the current week (Sunday-Saturday) or calendar month.
    """
    sessions = await load_user_sessions(db, user_id)
    return PeriodSummary(**summarize_period(sessions, period, reference_date or date.today()))


@router.get("/exercises", response_model=list[str])
async def exercise_names(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Distinct exercise names the user has logged (for the progression picker)."""
    result = await db.execute(
        select(SessionExercise.exercise_name)
        .join(WorkoutSession, WorkoutSession.id == SessionExercise.session_id)
        .where(WorkoutSession.user_id == user_id)
        .distinct()
    )
    names = set(result.scalars().all())
    return sorted(names, key=lambda n: (n.lower(), n))


@router.get("/progression", response_model=ProgressionSeries)
async def exercise_progression(
    exercise_name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Per-session max weight, reps and volume for one exercise, oldest first."""
    sessions = await load_user_sessions(db, user_id)
    points = progression_series(sessions, exercise_name)
    return ProgressionSeries(
        exercise_name=exercise_name.strip(),
        points=[ProgressionPoint(**p) for p in points],
    )
