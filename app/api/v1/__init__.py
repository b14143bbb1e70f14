"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    checkins,
    export,
    health,
    profile,
    quick_log,
    sessions,
    stats,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(checkins.router, prefix="/checkins", tags=["checkins"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(quick_log.router, prefix="/quick-log", tags=["quick-log"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
