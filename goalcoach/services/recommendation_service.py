import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from goalcoach.core.errors import NotFoundError, ValidationError
from goalcoach.models.goal import Goal, GoalStatusEnum
from goalcoach.models.recommended_goal import (
    RecommendedGoal, RecommendationStatusEnum, RecommendationSourceEnum,
)
from goalcoach.models.user import User
from goalcoach.models.workout_log import WorkoutLog
from goalcoach.repositories.goal_repository import GoalRepository
from goalcoach.repositories.recommendation_repository import RecommendationRepository
from goalcoach.repositories.workout_log_repository import WorkoutLogRepository
from goalcoach.schemas.onboarding import OnboardingData
from goalcoach.schemas.workout_log import WorkoutLogCreate
from goalcoach.services.ai_service import AIService
from goalcoach.services.onboarding_service import OnboardingService
from goalcoach.services.recommendation_engine import build_plan_details, generate_recommendations

logger = logging.getLogger(__name__)

ACCEPTED_GOAL_DAYS = 30


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _scheduled_activity(recommendation: RecommendedGoal, day_index: int, activity_index: int) -> Optional[dict]:
    schedule = (recommendation.plan_details or {}).get("schedule") or []
    if not 0 <= day_index < len(schedule):
        return None
    activities = schedule[day_index].get("activities") or []
    if not 0 <= activity_index < len(activities):
        return None
    return activities[activity_index]


class RecommendationService:
    def __init__(self, db: AsyncSession, ai: Optional[AIService] = None):
        self.db = db
        self.ai = ai
        self.recommendations = RecommendationRepository(db)
        self.goals = GoalRepository(db)
        self.logs = WorkoutLogRepository(db)

    async def get_recommendation(self, user: User, recommendation_id: int, for_update: bool = False) -> RecommendedGoal:
        recommendation = await self.recommendations.get_for_user(user.id, recommendation_id, for_update=for_update)
        if recommendation is None:
            raise NotFoundError("Recommendation not found")
        return recommendation

    async def generate(self, user: User, profile: Optional[OnboardingData] = None) -> List[RecommendedGoal]:
        if profile is None:
            profile = await OnboardingService(self.db).get_profile_data(user)

        items, source = await generate_recommendations(profile, ai=self.ai)
        records = [
            RecommendedGoal(
                user_id=user.id,
                title=item.title,
                category=item.category,
                description=item.description,
                plan=item.plan,
                reasoning=item.reasoning,
                plan_details=build_plan_details(item),
                source=RecommendationSourceEnum(source),
                status=RecommendationStatusEnum.suggested,
                is_accepted=False,
            )
            for item in items
        ]
        self.recommendations.add_all(records)
        await self.db.commit()
        for record in records:
            await self.db.refresh(record)

        logger.info("Generated %d %s recommendations for user %s", len(records), source, user.id)
        return records

    async def list_suggested(self, user: User) -> List[RecommendedGoal]:
        return await self.recommendations.list_suggested(user.id)

    def _ensure_suggested(self, recommendation: RecommendedGoal) -> None:
        if recommendation.status != RecommendationStatusEnum.suggested:
            raise ValidationError(f"Recommendation already {recommendation.status.value}")

    async def accept(self, user: User, recommendation_id: int) -> Goal:
        """Copy the suggestion into a new Goal and mark it accepted."""
        try:
            recommendation = await self.get_recommendation(user, recommendation_id, for_update=True)
            self._ensure_suggested(recommendation)

            now = datetime.utcnow()
            goal = Goal(
                user_id=user.id,
                title=recommendation.title,
                category=recommendation.category,
                specific=recommendation.description or recommendation.plan,
                measurable="Track progress through the provided plan",
                achievable="Based on your profile and preferences",
                relevant="Aligned with your fitness goals",
                start_date=now,
                end_date=now + timedelta(days=ACCEPTED_GOAL_DAYS),
                target_value=1,
                unit="plan",
                strategies=recommendation.plan,
                current_progress=0,
                status=GoalStatusEnum.not_started,
            )
            self.goals.add(goal)
            await self.db.flush()

            recommendation.status = RecommendationStatusEnum.accepted
            recommendation.is_accepted = True
            recommendation.accepted_goal_id = goal.id
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(goal)
        logger.info("Recommendation %s accepted as goal %s", recommendation_id, goal.id)
        return goal

    async def decline(self, user: User, recommendation_id: int) -> RecommendedGoal:
        recommendation = await self.get_recommendation(user, recommendation_id)
        self._ensure_suggested(recommendation)
        recommendation.status = RecommendationStatusEnum.declined
        await self.db.commit()
        await self.db.refresh(recommendation)
        return recommendation

    async def log_workout(self, user: User, recommendation_id: int, data: WorkoutLogCreate) -> WorkoutLog:
        recommendation = await self.get_recommendation(user, recommendation_id)
        logged_at = _as_naive_utc(data.date) if data.date else datetime.utcnow()

        target_met = False
        activity = _scheduled_activity(recommendation, data.day_index, data.activity_index)
        if activity and activity.get("targetValue"):
            day_start = logged_at.replace(hour=0, minute=0, second=0, microsecond=0)
            already = await self.logs.amount_logged_between(
                user.id, recommendation.id, data.activity_index, data.day_index,
                day_start, day_start + timedelta(days=1),
            )
            target_met = already + data.amount_logged >= float(activity["targetValue"])

        log = self.logs.add(WorkoutLog(
            user_id=user.id,
            recommended_goal_id=recommendation.id,
            activity_name=data.activity_name,
            day_index=data.day_index,
            activity_index=data.activity_index,
            amount_logged=data.amount_logged,
            unit=data.unit,
            date=logged_at,
            is_daily_target_met=target_met,
        ))
        await self.db.commit()
        await self.db.refresh(log)
        return log

    async def history(
        self,
        user: User,
        recommendation_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        activity_name: Optional[str] = None,
    ) -> dict:
        recommendation = await self.get_recommendation(user, recommendation_id)
        start = _as_naive_utc(start) if start else None
        end = _as_naive_utc(end) if end else None
        logs = await self.logs.list_logs(user.id, recommendation.id, start, end, activity_name)
        stats = await self.logs.activity_stats(user.id, recommendation.id, start, end, activity_name)
        return {"logs": logs, "stats": stats}
