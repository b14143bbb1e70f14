from datetime import date

import pytest

from tests.conftest import API, OTHER_USER_ID, as_user


async def create(client, payload, **kwargs):
    response = await client.post(f"{API}/sessions", json=payload, **kwargs)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_session_with_exercises_and_sets(client, bench_session):
    body = await create(client, bench_session)

    assert body["name"] == "Chest day"
    assert body["date"] == "2025-10-06"
    assert body["muscle_group"] == "Chest"
    names = [ex["exercise_name"] for ex in body["exercises"]]
    assert names == ["Bench Press", "Cable Fly"]
    bench = body["exercises"][0]
    assert [s["set_number"] for s in bench["sets"]] == [1, 2, 3]
    assert [s["weight"] for s in bench["sets"]] == [60, 70, 80]
    assert bench["stats"]["avg_weight"] == 70
    assert bench["stats"]["avg_reps"] == 8
    assert bench["stats"]["total_volume"] == 600 + 560 + 480
    assert bench["is_pr"] is True
    assert [s["is_pr"] for s in bench["sets"]] == [False, False, True]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "change, detail",
    [
        ({"name": "   "}, "Session name is required."),
        ({"exercises": []}, "Add at least one exercise."),
        ({"exercises": [{"exercise_name": "Squat", "sets": []}]}, "Exercise 'Squat' has no sets."),
        ({"exercises": [{"exercise_name": " ", "sets": [{"reps": 1, "weight": 1}]}]}, "Exercise name is required."),
    ],
)
async def test_create_session_rejects_incomplete_payload(client, bench_session, change, detail):
    response = await client.post(f"{API}/sessions", json={**bench_session, **change})
    assert response.status_code == 400
    assert response.json()["detail"] == detail


@pytest.mark.asyncio
async def test_create_session_rejects_negative_weight(client, bench_session):
    bench_session["exercises"][0]["sets"][0]["weight"] = -5
    response = await client.post(f"{API}/sessions", json=bench_session)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_sessions_newest_first_with_search(client, bench_session):
    await create(client, bench_session)
    await create(
        client,
        {
            "name": "Leg day",
            "date": "2025-10-08",
            "exercises": [{"exercise_name": "Squat", "sets": [{"reps": 5, "weight": 100}]}],
        },
    )

    response = await client.get(f"{API}/sessions")
    assert [s["name"] for s in response.json()] == ["Leg day", "Chest day"]

    response = await client.get(f"{API}/sessions", params={"q": "bench"})
    assert [s["name"] for s in response.json()] == ["Chest day"]

    response = await client.get(f"{API}/sessions", params={"q": "08/10/2025"})
    assert [s["name"] for s in response.json()] == ["Leg day"]


@pytest.mark.asyncio
async def test_pr_flags_use_whole_history(client, bench_session):
    first = await create(client, bench_session)
    heavier = {
        "name": "Heavy bench",
        "date": "2025-10-09",
        "exercises": [{"exercise_name": "Bench Press", "sets": [{"reps": 1, "weight": 90}]}],
    }
    await create(client, heavier)

    response = await client.get(f"{API}/sessions", params={"q": "Chest"})
    [chest] = response.json()
    assert chest["id"] == first["id"]
    assert chest["exercises"][0]["is_pr"] is False
    assert not any(s["is_pr"] for s in chest["exercises"][0]["sets"])

    response = await client.get(f"{API}/sessions/{first['id']}")
    assert response.json()["exercises"][0]["is_pr"] is False


@pytest.mark.asyncio
async def test_update_session(client, bench_session):
    body = await create(client, bench_session)
    response = await client.patch(
        f"{API}/sessions/{body['id']}",
        json={"name": "  Upper body ", "date": "2025-10-07", "muscle_group": ""},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Upper body"
    assert updated["date"] == "2025-10-07"
    assert updated["muscle_group"] is None
    assert len(updated["exercises"]) == 2


@pytest.mark.asyncio
async def test_delete_session_and_all_history(client, bench_session):
    first = await create(client, bench_session)
    await create(client, {**bench_session, "name": "Second"})

    response = await client.delete(f"{API}/sessions/{first['id']}")
    assert response.status_code == 204
    response = await client.get(f"{API}/sessions/{first['id']}")
    assert response.status_code == 404

    response = await client.delete(f"{API}/sessions")
    assert response.status_code == 204
    response = await client.get(f"{API}/sessions")
    assert response.json() == []


@pytest.mark.asyncio
async def test_sessions_are_scoped_to_their_owner(client, bench_session):
    body = await create(client, bench_session)
    other = as_user(OTHER_USER_ID)

    response = await client.get(f"{API}/sessions", headers=other)
    assert response.json() == []
    response = await client.get(f"{API}/sessions/{body['id']}", headers=other)
    assert response.status_code == 404
    response = await client.delete(f"{API}/sessions/{body['id']}", headers=other)
    assert response.status_code == 404
    set_id = body["exercises"][0]["sets"][0]["id"]
    response = await client.delete(f"{API}/sessions/{body['id']}/sets/{set_id}", headers=other)
    assert response.status_code == 404

    # Deleting everything as the other user leaves this user's history alone
    await client.delete(f"{API}/sessions", headers=other)
    response = await client.get(f"{API}/sessions/{body['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_active_session_flow(client):
    response = await client.post(f"{API}/sessions/start", json={"name": "Morning"})
    assert response.status_code == 201
    session = response.json()
    assert session["date"] == date.today().isoformat()
    assert session["exercises"] == []
    sid = session["id"]

    first = await client.post(
        f"{API}/sessions/{sid}/sets", json={"exercise_name": "Deadlift", "reps": 5, "weight": 120}
    )
    assert first.status_code == 201
    second = await client.post(
        f"{API}/sessions/{sid}/sets", json={"exercise_name": "Deadlift", "reps": 5, "weight": 130}
    )
    assert second.json()["set_number"] == 2
    assert second.json()["exercise_id"] == first.json()["exercise_id"]
    assert second.json()["is_pr"] is True
    assert second.json()["completed_at"] is not None

    response = await client.get(f"{API}/sessions/{sid}")
    [deadlift] = response.json()["exercises"]
    assert deadlift["exercise_name"] == "Deadlift"
    assert [s["weight"] for s in deadlift["sets"]] == [120, 130]


@pytest.mark.asyncio
async def test_add_exercise_then_sets(client):
    sid = (await client.post(f"{API}/sessions/start", json={"name": "Arms"})).json()["id"]

    response = await client.post(f"{API}/sessions/{sid}/exercises", json={"exercise_name": "Curl"})
    assert response.status_code == 201
    exercise = response.json()
    assert exercise["sets"] == []
    assert exercise["stats"] == {"avg_weight": 0, "avg_reps": 0, "total_volume": 0}

    url = f"{API}/sessions/{sid}/exercises/{exercise['id']}/sets"
    await client.post(url, json={"reps": 12, "weight": 10})
    response = await client.post(url, json={"reps": 10, "weight": 12, "rest_time": 90})
    assert response.status_code == 201
    assert response.json()["set_number"] == 2
    assert response.json()["rest_time"] == 90

    response = await client.patch(
        f"{API}/sessions/{sid}/exercises/{exercise['id']}", json={"exercise_name": "Hammer Curl"}
    )
    assert response.json()["exercise_name"] == "Hammer Curl"
    assert len(response.json()["sets"]) == 2


@pytest.mark.asyncio
async def test_update_and_delete_set_without_renumbering(client, bench_session):
    body = await create(client, bench_session)
    sid = body["id"]
    sets = body["exercises"][0]["sets"]

    response = await client.patch(f"{API}/sessions/{sid}/sets/{sets[0]['id']}", json={"reps": 12, "weight": 65})
    assert response.status_code == 200
    assert response.json()["reps"] == 12
    assert response.json()["weight"] == 65

    response = await client.delete(f"{API}/sessions/{sid}/sets/{sets[1]['id']}")
    assert response.status_code == 204

    response = await client.get(f"{API}/sessions/{sid}")
    remaining = response.json()["exercises"][0]["sets"]
    assert [s["set_number"] for s in remaining] == [1, 3]


@pytest.mark.asyncio
async def test_delete_exercise(client, bench_session):
    body = await create(client, bench_session)
    fly = body["exercises"][1]
    response = await client.delete(f"{API}/sessions/{body['id']}/exercises/{fly['id']}")
    assert response.status_code == 204
    response = await client.get(f"{API}/sessions/{body['id']}")
    assert [ex["exercise_name"] for ex in response.json()["exercises"]] == ["Bench Press"]


@pytest.mark.asyncio
async def test_unknown_exercise_in_session_is_404(client, bench_session):
    body = await create(client, bench_session)
    other = await create(client, {**bench_session, "name": "Other"})
    foreign_exercise = other["exercises"][0]["id"]
    response = await client.post(
        f"{API}/sessions/{body['id']}/exercises/{foreign_exercise}/sets", json={"reps": 1, "weight": 1}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_weight_suggestion_uses_last_set_of_latest_session(client, bench_session):
    await create(client, bench_session)
    await create(
        client,
        {
            "name": "Later",
            "date": "2025-10-10",
            "exercises": [{"exercise_name": "Bench Press", "sets": [{"reps": 5, "weight": 75}, {"reps": 5, "weight": 72.5}]}],
        },
    )
    response = await client.get(f"{API}/sessions/suggestion", params={"exercise_name": "Bench Press"})
    assert response.status_code == 200
    assert response.json() == {"exercise_name": "Bench Press", "last_weight": 72.5, "suggested_weight": 75.0}


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["Squat", "Be"])
async def test_weight_suggestion_empty(client, bench_session, name):
    await create(client, bench_session)
    response = await client.get(f"{API}/sessions/suggestion", params={"exercise_name": name})
    assert response.json()["suggested_weight"] is None


@pytest.mark.asyncio
async def test_muscle_group_options(client):
    response = await client.get(f"{API}/sessions/muscle-groups")
    assert response.status_code == 200
    assert "Chest" in response.json()


@pytest.mark.asyncio
async def test_weight_suggestion_only_looks_at_recent_sessions(client, bench_session):
    await create(client, {**bench_session, "date": "2025-10-01"})
    for day in range(2, 7):
        await create(
            client,
            {
                "name": f"Legs {day}",
                "date": f"2025-10-0{day}",
                "exercises": [{"exercise_name": "Squat", "sets": [{"reps": 5, "weight": 100}]}],
            },
        )
    params = {"exercise_name": "Bench Press"}
    response = await client.get(f"{API}/sessions/suggestion", params=params)
    assert response.json() == {"exercise_name": "Bench Press", "last_weight": None, "suggested_weight": None}

    await create(
        client,
        {
            "name": "Light bench",
            "date": "2025-10-07",
            "exercises": [{"exercise_name": "Bench Press", "sets": [{"reps": 10, "weight": 60}]}],
        },
    )
    response = await client.get(f"{API}/sessions/suggestion", params=params)
    assert response.json()["suggested_weight"] == 62.5


@pytest.mark.asyncio
async def test_weight_suggestion_when_latest_exercise_has_no_sets(client, bench_session):
    await create(client, bench_session)
    sid = (await client.post(f"{API}/sessions/start", json={"name": "Today"})).json()["id"]
    await client.post(f"{API}/sessions/{sid}/exercises", json={"exercise_name": "Bench Press"})

    response = await client.get(f"{API}/sessions/suggestion", params={"exercise_name": "Bench Press"})
    assert response.json()["last_weight"] is None
    assert response.json()["suggested_weight"] is None


@pytest.mark.asyncio
async def test_set_weight_is_rounded_to_two_decimals(client, bench_session):
    body = await create(client, bench_session)
    sid, bench = body["id"], body["exercises"][0]

    response = await client.post(
        f"{API}/sessions/{sid}/exercises/{bench['id']}/sets", json={"reps": 3, "weight": 80.005}
    )
    assert response.json()["weight"] == 80.01
    assert response.json()["is_pr"] is True

    set_id = bench["sets"][0]["id"]
    response = await client.patch(f"{API}/sessions/{sid}/sets/{set_id}", json={"weight": 72.555})
    assert response.json()["weight"] == 72.56


@pytest.mark.asyncio
async def test_edits_are_logged_with_ids(client, bench_session, caplog):
    body = await create(client, bench_session)
    sid, bench = body["id"], body["exercises"][0]
    set_id = bench["sets"][0]["id"]

    with caplog.at_level("INFO", logger="app.api.v1.endpoints.sessions"):
        await client.patch(f"{API}/sessions/{sid}/exercises/{bench['id']}", json={"exercise_name": "Incline"})
        await client.delete(f"{API}/sessions/{sid}/sets/{set_id}")

    assert f"Renamed exercise {bench['id']} in session {sid}" in caplog.text
    assert f"Deleted set {set_id} from session {sid}" in caplog.text
