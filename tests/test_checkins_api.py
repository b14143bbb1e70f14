import pytest

from tests.conftest import API, OTHER_USER_ID, as_user


@pytest.mark.asyncio
async def test_toggle_marks_and_unmarks_a_day(client):
    response = await client.post(f"{API}/checkins/toggle", json={"date": "2025-10-06"})
    assert response.json() == {"date": "2025-10-06", "checked_in": True}
    await client.post(f"{API}/checkins/toggle", json={"date": "2025-10-02"})

    response = await client.get(f"{API}/checkins")
    assert response.json() == ["2025-10-02", "2025-10-06"]

    response = await client.post(f"{API}/checkins/toggle", json={"date": "2025-10-06"})
    assert response.json() == {"date": "2025-10-06", "checked_in": False}
    response = await client.get(f"{API}/checkins")
    assert response.json() == ["2025-10-02"]


@pytest.mark.asyncio
async def test_list_checkins_in_range(client):
    for day in ("2025-09-30", "2025-10-01", "2025-10-15", "2025-11-01"):
        await client.post(f"{API}/checkins/toggle", json={"date": day})
    response = await client.get(
        f"{API}/checkins", params={"from_date": "2025-10-01", "to_date": "2025-10-31"}
    )
    assert response.json() == ["2025-10-01", "2025-10-15"]


@pytest.mark.asyncio
async def test_delete_checkin_is_idempotent(client):
    await client.post(f"{API}/checkins/toggle", json={"date": "2025-10-06"})
    assert (await client.delete(f"{API}/checkins/2025-10-06")).status_code == 204
    assert (await client.delete(f"{API}/checkins/2025-10-06")).status_code == 204
    assert (await client.get(f"{API}/checkins")).json() == []


@pytest.mark.asyncio
async def test_checkins_are_per_user(client):
    await client.post(f"{API}/checkins/toggle", json={"date": "2025-10-06"})
    response = await client.post(
        f"{API}/checkins/toggle", json={"date": "2025-10-06"}, headers=as_user(OTHER_USER_ID)
    )
    assert response.json()["checked_in"] is True
    assert (await client.get(f"{API}/checkins")).json() == ["2025-10-06"]


@pytest.mark.asyncio
async def test_delete_checkin_is_logged(client, caplog):
    with caplog.at_level("INFO", logger="app.api.v1.endpoints.checkins"):
        await client.delete(f"{API}/checkins/2025-10-06")
    assert "Removed check-in 2025-10-06" in caplog.text
