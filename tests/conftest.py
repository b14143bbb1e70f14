"""Shared fixtures: in-memory SQLite database and an ASGI client with auth overridden."""

import uuid

import pytest
import pytest_asyncio
from fastapi import Request
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401 - register all models
from app.api.deps import get_current_user_id
from app.db.base import Base
from app.db.session import get_db
from app.main import app

USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
API = "/api/v1"


def as_user(user_id: uuid.UUID) -> dict:
    """Headers that make the overridden auth dependency act as ``user_id``."""
    return {"X-Test-User": str(user_id)}


async def _test_user(request: Request) -> uuid.UUID:
    return uuid.UUID(request.headers.get("X-Test-User", str(USER_ID)))


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = _test_user
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def bench_session() -> dict:
    return {
        "name": "Chest day",
        "date": "2025-10-06",
        "muscle_group": "Chest",
        "exercises": [
            {
                "exercise_name": "Bench Press",
                "sets": [
                    {"reps": 10, "weight": 60},
                    {"reps": 8, "weight": 70},
                    {"reps": 6, "weight": 80},
                ],
            },
            {
                "exercise_name": "Cable Fly",
                "sets": [{"reps": 12, "weight": 15}],
            },
        ],
    }
