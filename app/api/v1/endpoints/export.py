"""CSV export of the session history."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user_id
from app.db.session import get_db
from app.services.csv_export import render_sessions_csv
from app.services.session_queries import load_user_sessions

router = APIRouter()


@router.get("/sessions.csv", response_class=Response)
async def export_sessions_csv(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
):
    """Download every set of every session as CSV (sessions newest first)."""
    sessions = await load_user_sessions(db, user_id)
    filename = f"workouts-{date.today().isoformat()}.csv"
    return Response(
        content=render_sessions_csv(sessions),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
