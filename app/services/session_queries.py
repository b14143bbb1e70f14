"""Owner-scoped session queries shared by the sessions, stats and export endpoints."""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import (
    SUGGESTION_INCREMENT_KG,
    SUGGESTION_LOOKBACK_SESSIONS,
    SUGGESTION_MIN_NAME_LENGTH,
)
from app.models.session import ExerciseSet, SessionExercise, WorkoutSession


def _session_query(user_id: uuid.UUID):
    return (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .options(selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets))
        .execution_options(populate_existing=True)
    )


async def load_user_sessions(db: AsyncSession, user_id: uuid.UUID) -> list[WorkoutSession]:
    """All sessions of the user with exercises and sets, newest date first."""
    result = await db.execute(
        _session_query(user_id).order_by(WorkoutSession.date.desc(), WorkoutSession.created_at.desc())
    )
    return list(result.scalars().all())


async def get_user_session(
    db: AsyncSession,
    user_id: uuid.UUID,
    session_id: uuid.UUID,
) -> WorkoutSession | None:
    """One session with exercises and sets, or None when missing or owned by someone else."""
    result = await db.execute(_session_query(user_id).where(WorkoutSession.id == session_id))
    return result.scalar_one_or_none()


async def suggest_next_weight(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_name: str,
) -> tuple[float | None, float | None]:
    """
    Return (last_weight, suggested_weight) for an exercise name.
    Looks at the user's most recent sessions by date; the exercise from the newest of them
    wins and its highest-numbered set gives the last weight. Suggestion = last + increment.
    """
    name = exercise_name.strip()
    if len(name) < SUGGESTION_MIN_NAME_LENGTH:
        return None, None
    recent = await db.execute(
        select(WorkoutSession.id)
        .where(WorkoutSession.user_id == user_id)
        .order_by(WorkoutSession.date.desc(), WorkoutSession.created_at.desc())
        .limit(SUGGESTION_LOOKBACK_SESSIONS)
    )
    session_ids = list(recent.scalars().all())
    if not session_ids:
        return None, None

    result = await db.execute(
        select(SessionExercise)
        .where(
            SessionExercise.session_id.in_(session_ids),
            SessionExercise.exercise_name == name,
        )
        .options(selectinload(SessionExercise.sets))
    )
    candidates = result.scalars().all()
    rank = {sid: i for i, sid in enumerate(session_ids)}
    if not candidates:
        return None, None
    exercise = min(candidates, key=lambda ex: (rank[ex.session_id], -ex.position))
    if not exercise.sets:
        return None, None
    last_set = max(exercise.sets, key=lambda s: s.set_number)
    last_weight = float(last_set.weight)
    return last_weight, last_weight + SUGGESTION_INCREMENT_KG


async def load_personal_records(db: AsyncSession, user_id: uuid.UUID) -> dict[str, float]:
    """Max set weight per exercise name over all of the user's sessions (positive maxima only)."""
    result = await db.execute(
        select(SessionExercise.exercise_name, func.max(ExerciseSet.weight).label("best"))
        .join(ExerciseSet, ExerciseSet.exercise_id == SessionExercise.id)
        .join(WorkoutSession, WorkoutSession.id == SessionExercise.session_id)
        .where(WorkoutSession.user_id == user_id)
        .group_by(SessionExercise.exercise_name)
    )
    return {row.exercise_name: float(row.best) for row in result.all() if row.best and row.best > 0}
