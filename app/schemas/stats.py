"""Statistics response schemas."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel

from app.core.enums import SummaryPeriod


class PersonalRecord(BaseModel):
    exercise_name: str
    weight: float


class PeriodSummary(BaseModel):
    period: SummaryPeriod
    start: dt.date
    end: dt.date
    total_workouts: int = 0
    days_with_workouts: int = 0
    max_weight: float = 0
    most_frequent_muscle_group: str = "-"
    total_sets: int = 0


class ProgressionPoint(BaseModel):
    session_id: UUID
    date: dt.date
    max_weight: float
    total_reps: int
    total_volume: float
    set_count: int


class ProgressionSeries(BaseModel):
    exercise_name: str
    points: list[ProgressionPoint] = []
