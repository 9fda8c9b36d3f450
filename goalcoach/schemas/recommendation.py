from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from goalcoach.models.goal import GoalCategoryEnum
from goalcoach.models.recommended_goal import RecommendationStatusEnum, RecommendationSourceEnum
from goalcoach.schemas.base import CamelModel
from goalcoach.schemas.goal import GoalRead
from goalcoach.schemas.onboarding import OnboardingData


class Recommendation(CamelModel):
    """One suggestion produced by the recommendation engine."""

    title: str = Field(min_length=1)
    category: GoalCategoryEnum
    description: str = ""
    plan: str = Field(min_length=1)
    reasoning: Optional[str] = None


class GenerateRecommendationsRequest(CamelModel):
    onboarding_data: Optional[OnboardingData] = None


class RecommendedGoalRead(CamelModel):
    id: int
    title: str
    category: GoalCategoryEnum
    description: str
    plan: str
    reasoning: Optional[str] = None
    plan_details: Optional[Dict[str, Any]] = None
    source: RecommendationSourceEnum
    is_accepted: bool
    status: RecommendationStatusEnum
    accepted_goal_id: Optional[int] = None
    created_at: Optional[datetime] = None


class GenerateRecommendationsResponse(CamelModel):
    goals: List[RecommendedGoalRead]


class AcceptRecommendationResponse(CamelModel):
    message: str = "Recommendation accepted"
    goal: GoalRead


class DeclineRecommendationResponse(CamelModel):
    message: str = "Recommendation declined"
