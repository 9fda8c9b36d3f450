from datetime import date, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from goalcoach.models.goal import GoalStatusEnum
from goalcoach.models.user import User
from goalcoach.repositories.goal_repository import GoalRepository
from goalcoach.repositories.progress_repository import ProgressRepository
from goalcoach.repositories.recommendation_repository import RecommendationRepository
from goalcoach.services import analytics_service


class ReportingService:
    """Loads a user's goals and progress for the pure aggregations."""

    def __init__(self, db: AsyncSession):
        self.goals = GoalRepository(db)
        self.progress = ProgressRepository(db)
        self.recommendations = RecommendationRepository(db)

    async def analytics(self, user: User, today: Optional[date] = None) -> dict:
        today = today or date.today()
        goals = await self.goals.list_for_user(user.id)
        entries = await self.progress.list_since(user.id, analytics_service.rollup_start(today))
        return analytics_service.build_analytics(goals, entries, today)

    async def dashboard(self, user: User, today: Optional[date] = None) -> dict:
        today = today or date.today()
        goals = await self.goals.list_for_user(user.id)
        entries = await self.progress.list_since(
            user.id, today - timedelta(days=analytics_service.STREAK_DAYS - 1)
        )
        rec_counts = await self.recommendations.status_counts(user.id)

        today_entries = [e for e in entries if e.date == today]
        streaks = analytics_service.build_streaks(entries, today)
        overview = analytics_service.build_overview(goals)

        return {
            "user_greeting": f"Welcome back, {user.name or user.email.split('@')[0]}!",
            "onboarding_completed": bool(user.onboarding_completed),
            "goals": {
                "total": overview["total_goals"],
                "not_started": overview["not_started_goals"],
                "in_progress": overview["in_progress_goals"],
                "completed": overview["completed_goals"],
                "abandoned": overview["abandoned_goals"],
            },
            "recommendations": {
                "suggested": rec_counts.get("suggested", 0),
                "accepted": rec_counts.get("accepted", 0),
                "declined": rec_counts.get("declined", 0),
            },
            "today": {
                "value": sum(e.value for e in today_entries),
                "entries": len(today_entries),
                "goals_logged": len({e.goal_id for e in today_entries}),
            },
            "current_streak": streaks["current"],
            "active_goals": [
                g for g in goals
                if g.status in (GoalStatusEnum.not_started, GoalStatusEnum.in_progress)
            ],
        }
