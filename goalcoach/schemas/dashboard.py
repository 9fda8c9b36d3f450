from typing import List

from goalcoach.schemas.base import CamelModel
from goalcoach.schemas.goal import GoalRead


class GoalsStats(CamelModel):
    total: int
    not_started: int
    in_progress: int
    completed: int
    abandoned: int


class RecommendationStats(CamelModel):
    suggested: int
    accepted: int
    declined: int


class TodayProgress(CamelModel):
    value: float
    entries: int
    goals_logged: int


class DashboardResponse(CamelModel):
    user_greeting: str
    onboarding_completed: bool
    goals: GoalsStats
    recommendations: RecommendationStats
    today: TodayProgress
    current_streak: int
    active_goals: List[GoalRead]
