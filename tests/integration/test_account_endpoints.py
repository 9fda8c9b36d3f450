"""
Integration tests for onboarding, /api/user/* and the analytics/dashboard views.
"""

import pytest

pytestmark = pytest.mark.integration

GOAL_BODY = {
    "title": "Meditate",
    "category": "mental_health",
    "specific": "Ten minutes a day",
    "measurable": "Sessions",
    "achievable": "Before breakfast",
    "relevant": "Less stress",
    "startDate": "2024-01-01T00:00:00",
    "endDate": "2024-12-31T00:00:00",
    "targetValue": 30,
    "unit": "sessions",
}


@pytest.fixture
def headers(db_user, auth_headers) -> dict:
    return auth_headers(db_user)


# ---------------------------------------------------------------------------
# onboarding / preferences
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_partial_onboarding_does_not_complete(db_client, headers):
    response = await db_client.post("/api/onboarding/partial", json={"sleepHours": 5}, headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["onboardingCompleted"] is False
    assert data["profile"]["sleepHours"] == 5
    # unanswered questions fall back to defaults
    assert data["profile"]["stressLevel"] == "Moderate"


@pytest.mark.asyncio
async def test_complete_onboarding_sets_flag(db_client, headers):
    response = await db_client.post("/api/onboarding", json={
        "goals": ["Sleep better"],
        "stressLevel": "High",
    }, headers=headers)
    me = await db_client.get("/api/auth/me", headers=headers)

    assert response.json()["onboardingCompleted"] is True
    assert me.json()["onboardingCompleted"] is True


@pytest.mark.asyncio
async def test_preferences_round_trip(db_client, headers):
    defaults = await db_client.get("/api/user/preferences", headers=headers)
    updated = await db_client.put("/api/user/preferences", json={"screenTime": 9}, headers=headers)
    stored = await db_client.get("/api/user/preferences", headers=headers)

    assert defaults.json()["screenTime"] == 4
    assert updated.json()["screenTime"] == 9
    assert stored.json()["screenTime"] == 9


@pytest.mark.asyncio
async def test_stored_preferences_drive_recommendations(db_client, headers):
    await db_client.put("/api/user/preferences", json={"physicalActivity": "Rarely"}, headers=headers)

    response = await db_client.post("/api/recommended-goals/generate", headers=headers)

    assert response.json()["goals"][0]["title"] == "Start Daily Walking Routine"


# ---------------------------------------------------------------------------
# profile / account
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_profile_name(db_client, headers):
    response = await db_client.put("/api/user/profile", json={"name": "  Renamed "}, headers=headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


@pytest.mark.asyncio
async def test_update_profile_rejects_blank_name(db_client, headers):
    response = await db_client.put("/api/user/profile", json={"name": "   "}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_account_requires_password(db_client, headers):
    response = await db_client.request("DELETE", "/api/user", json={"password": "wrong"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_account_removes_user_and_goals(db_client, headers):
    await db_client.post("/api/goals", json=GOAL_BODY, headers=headers)

    response = await db_client.request("DELETE", "/api/user", json={"password": "password123"}, headers=headers)
    me = await db_client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert me.status_code == 401


# ---------------------------------------------------------------------------
# analytics / dashboard
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_analytics_payload(db_client, headers):
    goal = (await db_client.post("/api/goals", json=GOAL_BODY, headers=headers)).json()
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 1}, headers=headers)

    response = await db_client.get("/api/analytics", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["overview"]["totalGoals"] == 1
    assert data["overview"]["inProgressGoals"] == 1
    assert len(data["charts"]["weekly"]) == 8
    assert len(data["charts"]["monthly"]) == 6
    assert data["charts"]["goalsByCategory"] == [{"category": "Mental Health", "count": 1}]
    assert data["streaks"]["current"] == 1
    assert data["streaks"]["calendar"][-1]["hasProgress"] is True


@pytest.mark.asyncio
async def test_dashboard_summary(db_client, headers):
    goal = (await db_client.post("/api/goals", json=GOAL_BODY, headers=headers)).json()
    await db_client.post(f"/api/goals/{goal['id']}/progress", json={"value": 2}, headers=headers)
    recs = (await db_client.post("/api/recommended-goals/generate", headers=headers)).json()["goals"]
    await db_client.post(f"/api/recommended-goals/{recs[0]['id']}/decline", headers=headers)

    response = await db_client.get("/api/dashboard", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["userGreeting"] == "Welcome back, Walker!"
    assert data["goals"]["inProgress"] == 1
    assert data["recommendations"] == {"suggested": 2, "accepted": 0, "declined": 1}
    assert data["today"] == {"value": 2, "entries": 1, "goalsLogged": 1}
    assert data["currentStreak"] == 1
    assert [g["id"] for g in data["activeGoals"]] == [goal["id"]]
