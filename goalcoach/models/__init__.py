from goalcoach.models.user import User
from goalcoach.models.onboarding import OnboardingProfile
from goalcoach.models.goal import Goal, GoalCategoryEnum, GoalStatusEnum
from goalcoach.models.progress import Progress
from goalcoach.models.recommended_goal import RecommendedGoal, RecommendationStatusEnum, RecommendationSourceEnum
from goalcoach.models.workout_log import WorkoutLog

__all__ = [
    "User", "OnboardingProfile",
    "Goal", "GoalCategoryEnum", "GoalStatusEnum",
    "Progress",
    "RecommendedGoal", "RecommendationStatusEnum", "RecommendationSourceEnum",
    "WorkoutLog",
]
