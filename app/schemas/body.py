"""Profile and body-weight Pydantic schemas."""

from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── UserProfile ──────────────────────────────────────────────────────────

class UserProfileUpsert(BaseModel):
    full_name: Optional[str] = Field(None, max_length=255)
    age: Optional[int] = Field(None, ge=1, le=120, description="Age in years")
    height: Optional[float] = Field(None, ge=50, le=300, description="Height in centimetres")
    goal: Optional[str] = Field(None, max_length=500, description="e.g. Gain muscle mass")

    @field_validator("full_name", "goal")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UserProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    full_name: Optional[str] = None
    age: Optional[int] = None
    height: Optional[float] = None
    goal: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


# ── Body weight ──────────────────────────────────────────────────────────

class BodyWeightCreate(BaseModel):
    weight: float = Field(..., gt=0, lt=700, description="Body weight in kg")
    date: dt.date = Field(default_factory=dt.date.today)


class BodyWeightRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    date: dt.date
    weight: float
    created_at: dt.datetime
