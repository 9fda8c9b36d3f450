"""
RecommendationService against an in-memory SQLite database.

The AI provider is left unconfigured so generation takes the rule path.
"""

import pytest
from datetime import datetime, timedelta

from goalcoach.core.errors import NotFoundError, ValidationError
from goalcoach.models.goal import GoalStatusEnum
from goalcoach.models.onboarding import OnboardingProfile
from goalcoach.models.recommended_goal import RecommendationStatusEnum, RecommendationSourceEnum
from goalcoach.schemas.onboarding import OnboardingData
from goalcoach.schemas.workout_log import WorkoutLogCreate
from goalcoach.services.ai_service import AIService
from goalcoach.services.recommendation_service import RecommendationService

pytestmark = pytest.mark.integration


@pytest.fixture
def service(db_session) -> RecommendationService:
    return RecommendationService(db_session, ai=AIService(api_key=""))


@pytest.fixture
async def recommendations(service, db_user):
    return await service.generate(db_user)


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_generate_without_profile_uses_defaults(recommendations):
    assert [r.title for r in recommendations] == [
        "Add Strength Training Sessions",
        "Optimize Sleep Quality & Schedule",
        "Improve Hydration & Nutrition",
    ]
    for rec in recommendations:
        assert rec.id is not None
        assert rec.status == RecommendationStatusEnum.suggested
        assert rec.source == RecommendationSourceEnum.rules
        assert rec.is_accepted is False


@pytest.mark.asyncio
async def test_generate_reads_stored_onboarding_profile(service, db_user, db_session):
    db_session.add(OnboardingProfile(user_id=db_user.id, physical_activity="Never", stress_level="High"))
    await db_session.commit()

    recs = await service.generate(db_user)

    assert recs[0].title == "Start Daily Walking Routine"


@pytest.mark.asyncio
async def test_generate_prefers_profile_from_request(service, db_user):
    profile = OnboardingData(physical_activity="Daily", sleep_hours=8, consistent_sleep=True,
                             water_intake=9, stress_level="Low", screen_time=1)

    recs = await service.generate(db_user, profile)

    assert [r.title for r in recs] == [
        "High-Intensity Interval Training", "Mindfulness Practice", "Progressive Goal Achievement",
    ]


@pytest.mark.asyncio
async def test_list_suggested_excludes_decided(service, recommendations, db_user):
    await service.decline(db_user, recommendations[0].id)

    suggested = await service.list_suggested(db_user)

    assert {r.id for r in suggested} == {recommendations[1].id, recommendations[2].id}


# ---------------------------------------------------------------------------
# accept / decline
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_accept_creates_goal_from_recommendation(service, recommendations, db_user):
    rec = recommendations[1]

    goal = await service.accept(db_user, rec.id)

    assert goal.title == rec.title
    assert goal.category == rec.category
    assert goal.specific == rec.description
    assert goal.measurable == "Track progress through the provided plan"
    assert goal.target_value == 1
    assert goal.unit == "plan"
    assert goal.status == GoalStatusEnum.not_started
    assert goal.end_date - goal.start_date == timedelta(days=30)

    accepted = await service.get_recommendation(db_user, rec.id)
    assert accepted.status == RecommendationStatusEnum.accepted
    assert accepted.is_accepted is True
    assert accepted.accepted_goal_id == goal.id


@pytest.mark.asyncio
async def test_accept_twice_is_rejected(service, recommendations, db_user):
    await service.accept(db_user, recommendations[0].id)

    with pytest.raises(ValidationError):
        await service.accept(db_user, recommendations[0].id)


@pytest.mark.asyncio
async def test_decline_does_not_create_goal(service, recommendations, db_user):
    declined = await service.decline(db_user, recommendations[2].id)

    assert declined.status == RecommendationStatusEnum.declined
    assert declined.accepted_goal_id is None
    with pytest.raises(ValidationError):
        await service.decline(db_user, recommendations[2].id)


@pytest.mark.asyncio
async def test_unknown_recommendation_is_not_found(service, db_user):
    with pytest.raises(NotFoundError):
        await service.decline(db_user, 9999)


# ---------------------------------------------------------------------------
# workout logs
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_workout_log_marks_daily_target_from_schedule(service, recommendations, db_user, db_session):
    rec = recommendations[0]
    rec.plan_details = {
        "type": "workout",
        "schedule": [{"day": 1, "activities": [{"name": "Push-ups", "targetValue": 30, "unit": "reps"}]}],
    }
    await db_session.commit()
    when = datetime(2024, 5, 6, 8, 0)

    first = await service.log_workout(db_user, rec.id, WorkoutLogCreate(
        activity_name="Push-ups", day_index=0, activity_index=0, amount_logged=20, unit="reps", date=when,
    ))
    second = await service.log_workout(db_user, rec.id, WorkoutLogCreate(
        activity_name="Push-ups", day_index=0, activity_index=0, amount_logged=10, unit="reps",
        date=when + timedelta(hours=9),
    ))

    assert first.is_daily_target_met is False
    assert second.is_daily_target_met is True


@pytest.mark.asyncio
async def test_generated_schedule_drives_daily_target(service, recommendations, db_user):
    rec = recommendations[0]
    activity = rec.plan_details["schedule"][2]["activities"][0]
    assert len(rec.plan_details["schedule"]) == 7
    assert rec.plan_details["type"] == "workout"

    short = await service.log_workout(db_user, rec.id, WorkoutLogCreate(
        activity_name=activity["name"], day_index=2, activity_index=0,
        amount_logged=activity["targetValue"] - 1, unit=activity["unit"],
    ))
    topped_up = await service.log_workout(db_user, rec.id, WorkoutLogCreate(
        activity_name=activity["name"], day_index=2, activity_index=0, amount_logged=1, unit=activity["unit"],
        date=short.date,
    ))

    assert short.is_daily_target_met is False
    assert topped_up.is_daily_target_met is True


@pytest.mark.asyncio
async def test_unscheduled_activity_never_meets_target(service, recommendations, db_user):
    log = await service.log_workout(db_user, recommendations[0].id, WorkoutLogCreate(
        activity_name="Walk", day_index=3, activity_index=1, amount_logged=100, unit="minutes",
    ))
    assert log.is_daily_target_met is False
    assert log.date is not None


@pytest.mark.asyncio
async def test_history_returns_logs_and_stats(service, recommendations, db_user):
    rec_id = recommendations[0].id
    for amount, activity in ((10, "Squats"), (20, "Squats"), (5, "Plank")):
        await service.log_workout(db_user, rec_id, WorkoutLogCreate(
            activity_name=activity, day_index=0, activity_index=0, amount_logged=amount, unit="reps",
        ))

    history = await service.history(db_user, rec_id)

    assert len(history["logs"]) == 3
    squats = next(s for s in history["stats"] if s["activity_name"] == "Squats")
    assert squats["total_amount"] == 30
    assert squats["average_amount"] == 15
    assert squats["total_entries"] == 2

    filtered = await service.history(db_user, rec_id, activity_name="Plank")
    assert [log.activity_name for log in filtered["logs"]] == ["Plank"]
