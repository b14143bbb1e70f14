"""Print row counts for every application table (quick sanity check against the hosted DB)."""

import asyncio

from sqlalchemy import func, select

from app.db.session import async_session_maker, engine
from app.models import (
    BodyWeightEntry,
    ExerciseSet,
    QuickWorkout,
    SessionExercise,
    UserProfile,
    WorkoutCheckin,
    WorkoutSession,
)

MODELS = [WorkoutSession, SessionExercise, ExerciseSet, BodyWeightEntry, UserProfile, WorkoutCheckin, QuickWorkout]


async def check_data():
    async with async_session_maker() as session:
        for model in MODELS:
            count = (await session.execute(select(func.count()).select_from(model))).scalar()
            print(f"Table '{model.__tablename__}' row count: {count}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
