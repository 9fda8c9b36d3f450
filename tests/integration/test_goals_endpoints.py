"""
Integration tests for /api/goals/* and /api/progress over in-memory SQLite.

Requests authenticate with real JWTs, so get_current_user runs unchanged.
"""

import json
import pytest
from datetime import date, timedelta

pytestmark = pytest.mark.integration

GOAL_BODY = {
    "title": "Drink more water",
    "category": "nutrition",
    "specific": "Eight glasses a day",
    "measurable": "Glasses logged",
    "achievable": "Bottle on the desk",
    "relevant": "Energy",
    "startDate": "2024-01-01T00:00:00Z",
    "endDate": "2024-02-01T00:00:00Z",
    "targetValue": 10,
    "unit": "glasses",
}


@pytest.fixture
def headers(db_user, auth_headers) -> dict:
    return auth_headers(db_user)


async def create_goal(db_client, headers, **overrides) -> dict:
    response = await db_client.post("/api/goals", json={**GOAL_BODY, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# ---------------------------------------------------------------------------
# POST /goals, GET /goals
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_goal_returns_camel_case_goal(db_client, headers):
    goal = await create_goal(db_client, headers)

    assert goal["title"] == "Drink more water"
    assert goal["currentProgress"] == 0
    assert goal["status"] == "not_started"
    assert goal["targetValue"] == 10


@pytest.mark.asyncio
async def test_create_goal_missing_fields_returns_400(db_client, headers):
    response = await db_client.post("/api/goals", json={"title": "Incomplete"}, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request data"
    assert body["details"]


@pytest.mark.asyncio
async def test_create_goal_rejects_end_before_start(db_client, headers):
    response = await db_client.post(
        "/api/goals", json={**GOAL_BODY, "endDate": "2023-12-01T00:00:00Z"}, headers=headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_goal_rejects_zero_target(db_client, headers):
    response = await db_client.post("/api/goals", json={**GOAL_BODY, "targetValue": 0}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_goal_rejects_infinite_target(db_client, headers):
    body = json.dumps({**GOAL_BODY, "targetValue": float("inf")})
    response = await db_client.post(
        "/api/goals", content=body, headers={**headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["loc"][-1] == "targetValue"
    listed = await db_client.get("/api/goals", headers=headers)
    assert listed.json()["goals"] == []


@pytest.mark.asyncio
async def test_goals_require_authentication(db_client):
    response = await db_client.get("/api/goals")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_goals_with_category_counts(db_client, headers):
    await create_goal(db_client, headers)
    await create_goal(db_client, headers, title="Sleep early", category="sleep")

    response = await db_client.get("/api/goals", params={"category": "sleep"}, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert [g["title"] for g in data["goals"]] == ["Sleep early"]
    assert data["categoryCounts"] == {"nutrition": 1, "sleep": 1}


@pytest.mark.asyncio
async def test_unknown_goal_returns_404(db_client, headers):
    response = await db_client.get("/api/goals/999", headers=headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Goal not found"}


# ---------------------------------------------------------------------------
# progress
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_goal_progress_post_and_put(db_client, headers):
    goal = await create_goal(db_client, headers)

    first = await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 4}, headers=headers)
    second = await db_client.put(f"/api/goals/{goal['id']}/progress", json={"value": 6}, headers=headers)

    assert first.status_code == 200
    assert first.json()["goal"]["status"] == "in_progress"
    assert second.json()["success"] is True
    # same day: the PUT replaced the POST
    assert second.json()["goal"]["currentProgress"] == 6


@pytest.mark.asyncio
async def test_progress_endpoint_normalizes_datetime_to_day(db_client, headers):
    goal = await create_goal(db_client, headers)
    yesterday = date.today() - timedelta(days=1)

    response = await db_client.post("/api/progress", json={
        "goalId": goal["id"],
        "value": 3,
        "date": f"{yesterday.isoformat()}T12:00:00",
        "notes": "lunch",
    }, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["progress"]["date"] == yesterday.isoformat()
    assert data["goal"] == {"id": goal["id"], "currentProgress": 3, "status": "in_progress"}


@pytest.mark.asyncio
async def test_relogging_with_null_notes_clears_them(db_client, headers):
    goal = await create_goal(db_client, headers)
    url = f"/api/goals/{goal['id']}/progress"

    await db_client.post(url, json={"value": 1, "notes": "lunch"}, headers=headers)
    kept = await db_client.put(url, json={"value": 2}, headers=headers)
    cleared = await db_client.put(url, json={"value": 3, "notes": None}, headers=headers)

    assert kept.json()["progress"]["notes"] == "lunch"
    assert cleared.json()["progress"]["notes"] is None
    assert cleared.json()["goal"]["currentProgress"] == 3


@pytest.mark.asyncio
async def test_progress_completes_and_clamps(db_client, headers):
    goal = await create_goal(db_client, headers)
    today = date.today()

    await db_client.post("/api/progress", json={
        "goalId": goal["id"], "value": 8, "date": (today - timedelta(days=1)).isoformat(),
    }, headers=headers)
    response = await db_client.post("/api/progress", json={"goalId": goal["id"], "value": 8}, headers=headers)

    assert response.json()["goal"]["currentProgress"] == 10
    assert response.json()["goal"]["status"] == "completed"


@pytest.mark.asyncio
async def test_negative_progress_returns_400(db_client, headers):
    goal = await create_goal(db_client, headers)
    response = await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": -2}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_non_finite_progress_returns_400_and_leaves_goal_untouched(db_client, headers):
    goal = await create_goal(db_client, headers)
    json_headers = {**headers, "Content-Type": "application/json"}

    infinite = await db_client.post(
        f"/api/goals/{goal['id']}/progress", content='{"value": Infinity}', headers=json_headers,
    )
    nan = await db_client.post(
        "/api/progress", content=f'{{"goalId": {goal["id"]}, "value": NaN}}', headers=json_headers,
    )

    assert infinite.status_code == 400
    assert nan.status_code == 400
    fetched = await db_client.get(f"/api/goals/{goal['id']}", headers=headers)
    assert fetched.json()["currentProgress"] == 0
    assert fetched.json()["status"] == "not_started"
    listed = await db_client.get("/api/progress", headers=headers)
    assert listed.json()["progress"] == []


@pytest.mark.asyncio
async def test_list_progress(db_client, headers):
    goal = await create_goal(db_client, headers)
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 2}, headers=headers)

    response = await db_client.get("/api/progress", params={"goalId": goal["id"], "days": 7}, headers=headers)

    assert response.status_code == 200
    assert [p["value"] for p in response.json()["progress"]] == [2]


# ---------------------------------------------------------------------------
# update / abandon / reset / delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_target_rederives_status(db_client, headers):
    goal = await create_goal(db_client, headers)
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 6}, headers=headers)

    response = await db_client.put(f"/api/goals/{goal['id']}", json={"targetValue": 5}, headers=headers)

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["currentProgress"] == 5


@pytest.mark.asyncio
async def test_abandoned_goal_ignores_progress_status(db_client, headers):
    goal = await create_goal(db_client, headers)

    abandon = await db_client.post(f"/api/goals/{goal['id']}/abandon", headers=headers)
    progress = await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 100}, headers=headers)

    assert abandon.json()["goal"]["status"] == "abandoned"
    assert progress.json()["goal"]["status"] == "abandoned"


@pytest.mark.asyncio
async def test_reset_today(db_client, headers):
    goal = await create_goal(db_client, headers)
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 4}, headers=headers)

    response = await db_client.post(f"/api/goals/{goal['id']}/reset-today", headers=headers)

    assert response.status_code == 200
    assert response.json()["goal"]["currentProgress"] == 0
    assert response.json()["goal"]["status"] == "not_started"


@pytest.mark.asyncio
async def test_delete_goal(db_client, headers):
    goal = await create_goal(db_client, headers)
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 4}, headers=headers)

    response = await db_client.delete(f"/api/goals/{goal['id']}", headers=headers)
    missing = await db_client.get(f"/api/goals/{goal['id']}", headers=headers)
    progress = await db_client.get("/api/progress", headers=headers)

    assert response.json() == {"success": True}
    assert missing.status_code == 404
    assert progress.json()["progress"] == []
