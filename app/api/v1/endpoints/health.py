"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


def _missing_tables(sync_conn) -> list[str]:
    existing = set(inspect(sync_conn).get_table_names())
    return sorted(set(Base.metadata.tables) - existing)


@router.get("")
async def health():
    """Liveness. Includes built_at when BACKEND_BUILT_AT is set."""
    settings = get_settings()
    payload: dict = {"status": "ok", "environment": settings.environment}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers and every table has been migrated."""
    try:
        conn = await db.connection()
        missing = await conn.run_sync(_missing_tables)
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unavailable"},
        )
    if missing:
        logger.warning("Schema not migrated, missing tables: %s", ", ".join(missing))
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "connected", "missing_tables": missing},
        )
    return {"status": "ok", "database": "connected"}
