"""Workout session, exercise and set schemas."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import EXERCISE_NAME_MAX_LENGTH, SESSION_NAME_MAX_LENGTH


def round_weight(value: float | None) -> float | None:
    """Round to the 2 decimals the weight column stores (half up, like PostgreSQL numeric)."""
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class ExerciseSetBase(BaseModel):
    reps: int = Field(..., ge=0)
    weight: float = Field(..., ge=0, description="Load in kg")

    @field_validator("weight")
    @classmethod
    def two_decimals(cls, v: float | None) -> float | None:
        return round_weight(v)


class ExerciseSetCreate(ExerciseSetBase):
    rest_time: int | None = Field(None, ge=0, description="Rest after the set, seconds")


class NamedSetCreate(ExerciseSetCreate):
    """Register a set against an exercise by name (created in the session if missing)."""

    exercise_name: str = Field(..., min_length=1, max_length=EXERCISE_NAME_MAX_LENGTH)


class ExerciseSetUpdate(BaseModel):
    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    rest_time: int | None = Field(None, ge=0)

    @field_validator("weight")
    @classmethod
    def two_decimals(cls, v: float | None) -> float | None:
        return round_weight(v)


class ExerciseSetRead(ExerciseSetBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercise_id: UUID
    set_number: int
    rest_time: int | None = None
    completed_at: dt.datetime | None = None
    is_pr: bool = False


class ExerciseStats(BaseModel):
    avg_weight: float = 0
    avg_reps: float = 0
    total_volume: float = 0


class SessionExerciseCreate(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=EXERCISE_NAME_MAX_LENGTH)
    sets: list[ExerciseSetCreate] = Field(default_factory=list)


class SessionExerciseUpdate(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=EXERCISE_NAME_MAX_LENGTH)


class SessionExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    session_id: UUID
    exercise_name: str
    sets: list[ExerciseSetRead] = []
    stats: ExerciseStats = ExerciseStats()
    is_pr: bool = False


class WorkoutSessionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=SESSION_NAME_MAX_LENGTH)
    muscle_group: str | None = Field(None, max_length=50)


class WorkoutSessionCreate(WorkoutSessionBase):
    """Session with its exercises and sets, saved in one request."""

    date: dt.date = Field(default_factory=dt.date.today)
    exercises: list[SessionExerciseCreate] = Field(default_factory=list)


class WorkoutSessionStart(BaseModel):
    """Start an empty session dated today."""

    name: str = Field(..., min_length=1, max_length=SESSION_NAME_MAX_LENGTH)


class WorkoutSessionUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=SESSION_NAME_MAX_LENGTH)
    date: dt.date | None = None
    muscle_group: str | None = Field(None, max_length=50)


class WorkoutSessionRead(WorkoutSessionBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: dt.date
    created_at: dt.datetime
    exercises: list[SessionExerciseRead] = []


class WeightSuggestion(BaseModel):
    exercise_name: str
    last_weight: float | None = None
    suggested_weight: float | None = None
