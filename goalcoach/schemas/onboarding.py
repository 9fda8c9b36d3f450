from typing import List, Optional

from goalcoach.schemas.base import CamelModel


class OnboardingData(CamelModel):
    """Survey answers. Defaults mirror an unanswered questionnaire."""

    goals: List[str] = []
    goal_importance: int = 3
    success_definition: str = ""
    sleep_hours: float = 7
    sleep_quality: str = "Good"
    consistent_sleep: bool = False
    eating_habits: str = "Balanced"
    water_intake: float = 6
    physical_activity: str = "2-3 times"
    stress_level: str = "Moderate"
    relaxation_frequency: str = "A few times a week"
    mindfulness_practice: bool = False
    screen_time: float = 4
    mindless_scrolling: bool = False
    existing_good_habits: List[str] = []
    habits_to_break: List[str] = []
    obstacles: List[str] = []
    discipline_level: int = 3
    peak_productivity_time: str = "Morning"
    reminder_preference: str = "Push notifications"
    habit_approach: str = "Start small and build up gradually"
    daily_time_commitment: str = "15-30 mins"
    motivation_factors: List[str] = []
    age_range: Optional[str] = None
    gender: Optional[str] = None
    occupation: Optional[str] = None


class OnboardingPartial(CamelModel):
    """Any subset of the survey, saved between onboarding steps."""

    goals: Optional[List[str]] = None
    goal_importance: Optional[int] = None
    success_definition: Optional[str] = None
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[str] = None
    consistent_sleep: Optional[bool] = None
    eating_habits: Optional[str] = None
    water_intake: Optional[float] = None
    physical_activity: Optional[str] = None
    stress_level: Optional[str] = None
    relaxation_frequency: Optional[str] = None
    mindfulness_practice: Optional[bool] = None
    screen_time: Optional[float] = None
    mindless_scrolling: Optional[bool] = None
    existing_good_habits: Optional[List[str]] = None
    habits_to_break: Optional[List[str]] = None
    obstacles: Optional[List[str]] = None
    discipline_level: Optional[int] = None
    peak_productivity_time: Optional[str] = None
    reminder_preference: Optional[str] = None
    habit_approach: Optional[str] = None
    daily_time_commitment: Optional[str] = None
    motivation_factors: Optional[List[str]] = None
    age_range: Optional[str] = None
    gender: Optional[str] = None
    occupation: Optional[str] = None


class OnboardingResponse(CamelModel):
    message: str
    onboarding_completed: bool
    profile: OnboardingData
