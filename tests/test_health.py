import pytest
from sqlalchemy import text

from tests.conftest import API


@pytest.mark.asyncio
async def test_root(client):
    response = await client.get("/")
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_liveness_reports_build_time(client, monkeypatch):
    monkeypatch.setenv("BACKEND_BUILT_AT", "2025-10-06T12:00:00Z")
    response = await client.get(f"{API}/health")
    assert response.json()["status"] == "ok"
    assert response.json()["built_at"] == "2025-10-06T12:00:00Z"


@pytest.mark.asyncio
async def test_readiness_checks_database(client):
    response = await client.get(f"{API}/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


@pytest.mark.asyncio
async def test_readiness_reports_unmigrated_tables(client, db_engine):
    async with db_engine.begin() as conn:
        await conn.execute(text("DROP TABLE workout_checkins"))
    response = await client.get(f"{API}/health/ready")
    assert response.status_code == 503
    assert response.json()["missing_tables"] == ["workout_checkins"]
