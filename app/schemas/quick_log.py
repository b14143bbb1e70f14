"""Quick-log schemas (single exercise entry without a session)."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.session import round_weight


class QuickWorkoutCreate(BaseModel):
    exercise: str = Field(..., min_length=1, max_length=255)
    weight: float = Field(..., ge=0)
    sets: int = Field(..., ge=1)
    reps: int = Field(..., ge=1)
    notes: str | None = None

    @field_validator("weight")
    @classmethod
    def two_decimals(cls, v: float) -> float:
        return round_weight(v)


class QuickWorkoutRead(QuickWorkoutCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: dt.datetime
