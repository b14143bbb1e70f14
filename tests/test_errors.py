import pytest
from sqlalchemy.exc import OperationalError

from app.api.v1.endpoints import stats
from tests.conftest import API


@pytest.mark.asyncio
async def test_database_errors_become_503(client, monkeypatch, caplog):
    async def broken_query(db, user_id):
        raise OperationalError("SELECT workout_sessions", {}, ConnectionRefusedError("connection refused"))

    monkeypatch.setattr(stats, "load_user_sessions", broken_query)
    with caplog.at_level("ERROR", logger="app.main"):
        response = await client.get(f"{API}/stats/summary")

    assert response.status_code == 503
    assert response.json() == {"detail": "Database unavailable"}
    assert "Database error on GET /api/v1/stats/summary" in caplog.text
