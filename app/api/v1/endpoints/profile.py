"""Profile endpoints: user profile upsert + body-weight history."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.db.session import get_db
from app.models.body_weight import BodyWeightEntry
from app.models.profile import UserProfile
from app.schemas.body import (
    BodyWeightCreate,
    BodyWeightRead,
    UserProfileRead,
    UserProfileUpsert,
)

logger = logging.getLogger(__name__)
router = APIRouter()


# ── UserProfile ──────────────────────────────────────────────────────────

@router.get("", response_model=Optional[UserProfileRead])
async def get_profile(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Get the user's profile. Returns null when none has been saved yet."""
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user_id))
    return result.scalar_one_or_none()


@router.put("", response_model=UserProfileRead)
async def upsert_profile(
    payload: UserProfileUpsert,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Create or replace the profile. Session is committed by get_db after this returns."""
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user_id))
    profile = result.scalar_one_or_none()

    if profile:
        for k, v in payload.model_dump().items():
            setattr(profile, k, v)
        profile.updated_at = datetime.now(timezone.utc)
    else:
        profile = UserProfile(user_id=user_id, **payload.model_dump())
        db.add(profile)
        logger.info("Created profile for user %s", user_id)

    await db.flush()
    await db.refresh(profile)
    return profile


# ── Body weight ──────────────────────────────────────────────────────────

@router.get("/weight", response_model=list[BodyWeightRead])
async def list_weight_entries(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Body-weight history, oldest first (chart order)."""
    result = await db.execute(
        select(BodyWeightEntry)
        .where(BodyWeightEntry.user_id == user_id)
        .order_by(BodyWeightEntry.date, BodyWeightEntry.created_at)
    )
    return list(result.scalars().all())


@router.post("/weight", response_model=BodyWeightRead, status_code=201)
async def add_weight_entry(
    payload: BodyWeightCreate,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Record a weigh-in (date defaults to today)."""
    entry = BodyWeightEntry(user_id=user_id, weight=payload.weight, date=payload.date)
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    logger.info("Weight %.1f kg recorded for %s on %s", entry.weight, user_id, entry.date)
    return entry


@router.delete("/weight/{entry_id}", status_code=204)
async def delete_weight_entry(
    entry_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    result = await db.execute(
        select(BodyWeightEntry).where(
            BodyWeightEntry.id == entry_id, BodyWeightEntry.user_id == user_id
        )
    )
    entry = result.scalar_one_or_none()
    if not entry:
        raise HTTPException(status_code=404, detail="Weight entry not found")
    await db.delete(entry)
    logger.info("Deleted weight entry %s for %s", entry_id, user_id)
    return None
