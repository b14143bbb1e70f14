"""Workout session endpoints: history, saved sessions, the active-session flow and editing."""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user_id
from app.core.constants import MUSCLE_GROUPS
from app.db.session import get_db
from app.models.session import ExerciseSet, SessionExercise, WorkoutSession
from app.schemas.session import (
    ExerciseSetCreate,
    ExerciseSetRead,
    ExerciseSetUpdate,
    ExerciseStats,
    NamedSetCreate,
    SessionExerciseCreate,
    SessionExerciseRead,
    SessionExerciseUpdate,
    WeightSuggestion,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSessionStart,
    WorkoutSessionUpdate,
)
from app.services.session_queries import (
    get_user_session,
    load_personal_records,
    load_user_sessions,
    suggest_next_weight,
)
from app.services.workout_stats import (
    compute_personal_records,
    exercise_stats,
    filter_sessions,
    is_exercise_pr,
    is_set_pr,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ── Response builders ────────────────────────────────────────────────────

def _set_read(s: ExerciseSet, exercise_name: str, prs: dict[str, float]) -> ExerciseSetRead:
    read = ExerciseSetRead.model_validate(s)
    read.is_pr = is_set_pr(exercise_name, s.weight, prs)
    return read


def _exercise_read(ex: SessionExercise, prs: dict[str, float]) -> SessionExerciseRead:
    return SessionExerciseRead(
        id=ex.id,
        session_id=ex.session_id,
        exercise_name=ex.exercise_name,
        sets=[_set_read(s, ex.exercise_name, prs) for s in ex.sets],
        stats=ExerciseStats(**exercise_stats(ex.sets)),
        is_pr=is_exercise_pr(ex, prs),
    )


def _session_read(session: WorkoutSession, prs: dict[str, float]) -> WorkoutSessionRead:
    return WorkoutSessionRead(
        id=session.id,
        name=session.name,
        date=session.date,
        muscle_group=session.muscle_group,
        created_at=session.created_at,
        exercises=[_exercise_read(ex, prs) for ex in session.exercises],
    )


def _clean_name(value: str, what: str) -> str:
    name = value.strip()
    if not name:
        raise HTTPException(status_code=400, detail=f"{what} name is required.")
    return name


async def _owned_session_or_404(
    db: AsyncSession, user_id: uuid.UUID, session_id: uuid.UUID
) -> WorkoutSession:
    session = await get_user_session(db, user_id, session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _exercise_in(session: WorkoutSession, exercise_id: uuid.UUID) -> SessionExercise:
    for ex in session.exercises:
        if ex.id == exercise_id:
            return ex
    raise HTTPException(status_code=404, detail="Exercise not found")


async def _owned_set_or_404(
    db: AsyncSession, user_id: uuid.UUID, session_id: uuid.UUID, set_id: uuid.UUID
) -> ExerciseSet:
    result = await db.execute(
        select(ExerciseSet)
        .join(SessionExercise, SessionExercise.id == ExerciseSet.exercise_id)
        .join(WorkoutSession, WorkoutSession.id == SessionExercise.session_id)
        .where(
            ExerciseSet.id == set_id,
            SessionExercise.session_id == session_id,
            WorkoutSession.user_id == user_id,
        )
        .options(selectinload(ExerciseSet.exercise))
    )
    set_ = result.scalar_one_or_none()
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    return set_


def _append_set(exercise: SessionExercise, payload: ExerciseSetCreate) -> ExerciseSet:
    """Next set number is the current set count + 1 (deleted sets are not renumbered)."""
    set_ = ExerciseSet(
        set_number=len(exercise.sets) + 1,
        reps=payload.reps,
        weight=payload.weight,
        rest_time=payload.rest_time,
        completed_at=datetime.now(timezone.utc),
    )
    exercise.sets.append(set_)
    return set_


# ── Sessions ─────────────────────────────────────────────────────────────

@router.get("", response_model=list[WorkoutSessionRead])
async def list_sessions(
    q: str | None = Query(None, description="Search session name, exercise name or dd/mm/yyyy date"),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Session history, newest first, with exercises, sets, per-exercise stats and PR flags."""
    sessions = await load_user_sessions(db, user_id)
    # Records always come from the full history, not the filtered view
    prs = compute_personal_records(sessions)
    return [_session_read(s, prs) for s in filter_sessions(sessions, q)]


@router.post("", response_model=WorkoutSessionRead, status_code=201)
async def create_session(
    payload: WorkoutSessionCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Save a finished session with its exercises and sets. Set numbers follow the given order."""
    name = _clean_name(payload.name, "Session")
    if not payload.exercises:
        raise HTTPException(status_code=400, detail="Add at least one exercise.")
    exercises = []
    for position, ex in enumerate(payload.exercises):
        ex_name = _clean_name(ex.exercise_name, "Exercise")
        if not ex.sets:
            raise HTTPException(status_code=400, detail=f"Exercise '{ex_name}' has no sets.")
        exercises.append(
            SessionExercise(
                exercise_name=ex_name,
                position=position,
                sets=[
                    ExerciseSet(set_number=i, reps=s.reps, weight=s.weight, rest_time=s.rest_time)
                    for i, s in enumerate(ex.sets, start=1)
                ],
            )
        )
    session = WorkoutSession(
        user_id=user_id,
        name=name,
        date=payload.date,
        muscle_group=(payload.muscle_group or "").strip() or None,
        exercises=exercises,
    )
    db.add(session)
    await db.flush()
    logger.info("Created session %s with %d exercises", session.id, len(exercises))

    session = await _owned_session_or_404(db, user_id, session.id)
    return _session_read(session, await load_personal_records(db, user_id))


@router.post("/start", response_model=WorkoutSessionRead, status_code=201)
async def start_session(
    payload: WorkoutSessionStart,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Start an empty session dated today; exercises and sets are added as they happen."""
    session = WorkoutSession(
        user_id=user_id,
        name=_clean_name(payload.name, "Session"),
        date=date.today(),
        exercises=[],
    )
    db.add(session)
    await db.flush()
    await db.refresh(session, attribute_names=["created_at"])
    logger.info("Started session %s", session.id)
    return _session_read(session, {})


@router.delete("", status_code=204)
async def delete_all_sessions(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete the whole history of the user (exercises and sets go with their sessions)."""
    sessions = await load_user_sessions(db, user_id)
    for session in sessions:
        await db.delete(session)
    logger.info("Deleted %d sessions for user %s", len(sessions), user_id)
    return None


@router.get("/muscle-groups", response_model=list[str], dependencies=[Depends(get_current_user_id)])
async def muscle_groups():
    """Muscle groups offered by the session form. Stored values are free text."""
    return list(MUSCLE_GROUPS)


@router.get("/suggestion", response_model=WeightSuggestion)
async def weight_suggestion(
    exercise_name: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Next weight for an exercise: last logged weight from recent sessions plus 2.5 kg."""
    last_weight, suggested = await suggest_next_weight(db, user_id, exercise_name)
    return WeightSuggestion(
        exercise_name=exercise_name.strip(),
        last_weight=last_weight,
        suggested_weight=suggested,
    )


@router.get("/{session_id}", response_model=WorkoutSessionRead)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    session = await _owned_session_or_404(db, user_id, session_id)
    return _session_read(session, await load_personal_records(db, user_id))


@router.patch("/{session_id}", response_model=WorkoutSessionRead)
async def update_session(
    session_id: uuid.UUID,
    payload: WorkoutSessionUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Rename, re-date or change the muscle group of a session (partial)."""
    session = await _owned_session_or_404(db, user_id, session_id)
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        if data["name"] is None:
            raise HTTPException(status_code=400, detail="Session name is required.")
        data["name"] = _clean_name(data["name"], "Session")
    if "date" in data and data["date"] is None:
        raise HTTPException(status_code=400, detail="Session date is required.")
    if "muscle_group" in data:
        data["muscle_group"] = (data["muscle_group"] or "").strip() or None
    for k, v in data.items():
        setattr(session, k, v)
    await db.flush()
    logger.info("Updated session %s (%s)", session_id, ", ".join(sorted(data)))
    return _session_read(session, await load_personal_records(db, user_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete a session with its exercises and sets."""
    session = await _owned_session_or_404(db, user_id, session_id)
    await db.delete(session)
    logger.info("Deleted session %s", session_id)
    return None


# ── Exercises ────────────────────────────────────────────────────────────

@router.post("/{session_id}/exercises", response_model=SessionExerciseRead, status_code=201)
async def add_exercise(
    session_id: uuid.UUID,
    payload: SessionExerciseCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Append an exercise (optionally with sets) to a session."""
    session = await _owned_session_or_404(db, user_id, session_id)
    exercise = SessionExercise(
        exercise_name=_clean_name(payload.exercise_name, "Exercise"),
        position=max((ex.position for ex in session.exercises), default=-1) + 1,
        sets=[],
    )
    session.exercises.append(exercise)
    for s in payload.sets:
        _append_set(exercise, s)
    await db.flush()
    logger.info("Added exercise %s to session %s", exercise.id, session_id)
    return _exercise_read(exercise, await load_personal_records(db, user_id))


@router.patch("/{session_id}/exercises/{exercise_id}", response_model=SessionExerciseRead)
async def rename_exercise(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: SessionExerciseUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    session = await _owned_session_or_404(db, user_id, session_id)
    exercise = _exercise_in(session, exercise_id)
    exercise.exercise_name = _clean_name(payload.exercise_name, "Exercise")
    await db.flush()
    logger.info("Renamed exercise %s in session %s", exercise_id, session_id)
    return _exercise_read(exercise, await load_personal_records(db, user_id))


@router.delete("/{session_id}/exercises/{exercise_id}", status_code=204)
async def delete_exercise(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    session = await _owned_session_or_404(db, user_id, session_id)
    exercise = _exercise_in(session, exercise_id)
    session.exercises.remove(exercise)
    await db.flush()
    logger.info("Deleted exercise %s from session %s", exercise_id, session_id)
    return None


# ── Sets ─────────────────────────────────────────────────────────────────

@router.post(
    "/{session_id}/exercises/{exercise_id}/sets",
    response_model=ExerciseSetRead,
    status_code=201,
)
async def add_set(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: ExerciseSetCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Register the next set of an exercise."""
    session = await _owned_session_or_404(db, user_id, session_id)
    exercise = _exercise_in(session, exercise_id)
    set_ = _append_set(exercise, payload)
    await db.flush()
    logger.info("Added set %d (%s) to exercise %s", set_.set_number, set_.id, exercise.id)
    return _set_read(set_, exercise.exercise_name, await load_personal_records(db, user_id))


@router.post("/{session_id}/sets", response_model=ExerciseSetRead, status_code=201)
async def add_set_by_name(
    session_id: uuid.UUID,
    payload: NamedSetCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Register a set by exercise name, creating the exercise in the session on first use."""
    session = await _owned_session_or_404(db, user_id, session_id)
    name = _clean_name(payload.exercise_name, "Exercise")
    exercise = next((ex for ex in session.exercises if ex.exercise_name == name), None)
    if exercise is None:
        exercise = SessionExercise(
            exercise_name=name,
            position=max((ex.position for ex in session.exercises), default=-1) + 1,
            sets=[],
        )
        session.exercises.append(exercise)
        logger.info("Added exercise '%s' to session %s", name, session_id)
    set_ = _append_set(exercise, payload)
    await db.flush()
    logger.info("Added set %d (%s) to exercise %s", set_.set_number, set_.id, exercise.id)
    return _set_read(set_, exercise.exercise_name, await load_personal_records(db, user_id))


@router.patch("/{session_id}/sets/{set_id}", response_model=ExerciseSetRead)
async def update_set(
    session_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: ExerciseSetUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Correct the reps, weight or rest time of a set."""
    set_ = await _owned_set_or_404(db, user_id, session_id, set_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is None and k != "rest_time":
            continue
        setattr(set_, k, v)
    await db.flush()
    logger.info("Updated set %s in session %s", set_id, session_id)
    return _set_read(set_, set_.exercise.exercise_name, await load_personal_records(db, user_id))


@router.delete("/{session_id}/sets/{set_id}", status_code=204)
async def delete_set(
    session_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Delete a set. Remaining sets keep their numbers."""
    set_ = await _owned_set_or_404(db, user_id, session_id, set_id)
    await db.delete(set_)
    logger.info("Deleted set %s from session %s", set_id, session_id)
    return None
