import logging
from typing import Any, Dict, List, Optional, Tuple

from goalcoach.core.errors import UpstreamError
from goalcoach.models.goal import GoalCategoryEnum
from goalcoach.schemas.onboarding import OnboardingData
from goalcoach.schemas.recommendation import Recommendation
from goalcoach.services.ai_service import AIService, ai_service

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 3

LOW_ACTIVITY = {"never", "rarely", "0-1 times"}
MODERATE_ACTIVITY = {"2-3 times"}
POOR_EATING = {"poor", "very unhealthy"}
HIGH_STRESS = {"high", "very high"}

SCHEDULE_DAYS = 7

PLAN_TYPES = {
    GoalCategoryEnum.fitness: "workout",
    GoalCategoryEnum.nutrition: "nutrition",
    GoalCategoryEnum.mental_health: "mental",
    GoalCategoryEnum.productivity: "productivity",
    GoalCategoryEnum.sleep: "sleep",
    GoalCategoryEnum.other: "other",
}

# activity name, daily target, unit
DAILY_ACTIVITIES = {
    GoalCategoryEnum.fitness: ("Workout", 30, "minutes"),
    GoalCategoryEnum.nutrition: ("Water", 8, "glasses"),
    GoalCategoryEnum.mental_health: ("Mindfulness", 10, "minutes"),
    GoalCategoryEnum.productivity: ("Focused work", 25, "minutes"),
    GoalCategoryEnum.sleep: ("Sleep", 7, "hours"),
    GoalCategoryEnum.other: ("Daily action", 1, "sessions"),
}


def _activity_key(value: str) -> str:
    # "Rarely (1-2 times/month)" -> "rarely"
    return (value or "").split("(")[0].strip().lower()


def _goals_text(profile: OnboardingData) -> str:
    return ", ".join(profile.goals) if profile.goals else "general wellness"


def _fitness_rule(profile: OnboardingData) -> Recommendation:
    activity = _activity_key(profile.physical_activity)
    if activity in LOW_ACTIVITY:
        return Recommendation(
            title="Start Daily Walking Routine",
            category=GoalCategoryEnum.fitness,
            description="Build a foundation of daily movement with a gentle walking routine",
            plan=(
                f"Start with 15-minute walks during your {profile.peak_productivity_time.lower()} hours, "
                "gradually increasing to 30 minutes over 4 weeks"
            ),
            reasoning=(
                f"Given your current low activity level and {profile.daily_time_commitment} time commitment, "
                "walking is an achievable starting point that fits your schedule."
            ),
        )
    if activity in MODERATE_ACTIVITY:
        return Recommendation(
            title="Add Strength Training Sessions",
            category=GoalCategoryEnum.fitness,
            description="Complement your current routine with strength training for balanced fitness",
            plan="Add 2 strength training sessions per week, focusing on major muscle groups with bodyweight or basic equipment",
            reasoning=(
                "Your current activity level shows commitment, and adding strength training will enhance "
                f"your overall fitness goals: {_goals_text(profile)}."
            ),
        )
    return Recommendation(
        title="High-Intensity Interval Training",
        category=GoalCategoryEnum.fitness,
        description="Maximize your fitness gains with efficient HIIT workouts",
        plan="Incorporate 20-minute HIIT sessions 3 times per week, alternating with your current routine",
        reasoning=(
            f"With your active lifestyle, HIIT will help you achieve your goals of {_goals_text(profile)} "
            f"more efficiently within your {profile.daily_time_commitment} commitment."
        ),
    )


def _sleep_rule(profile: OnboardingData) -> Optional[Recommendation]:
    if not (profile.sleep_quality.lower() == "poor" or profile.sleep_hours < 7 or not profile.consistent_sleep):
        return None
    hours = max(7, profile.sleep_hours)
    return Recommendation(
        title="Optimize Sleep Quality & Schedule",
        category=GoalCategoryEnum.sleep,
        description="Establish a consistent sleep routine for better recovery and energy",
        plan=f"Create a bedtime routine 1 hour before your target sleep time, aiming for {hours:g} hours of sleep consistently",
        reasoning=(
            f"Your current sleep pattern ({profile.sleep_hours:g} hours, {profile.sleep_quality} quality) may be "
            f"limiting your progress. Better sleep will support your {_goals_text(profile)} goals."
        ),
    )


def _nutrition_rule(profile: OnboardingData) -> Optional[Recommendation]:
    if not (profile.eating_habits.lower() in POOR_EATING or profile.water_intake < 8):
        return None
    return Recommendation(
        title="Improve Hydration & Nutrition",
        category=GoalCategoryEnum.nutrition,
        description="Build healthy eating and hydration habits for sustained energy",
        plan="Increase water intake to 8-10 glasses daily and add one extra serving of vegetables to each meal",
        reasoning=(
            f"Your current hydration ({profile.water_intake:g} glasses) and eating habits can be improved "
            "to better support your wellness goals and energy levels."
        ),
    )


def _stress_rule(profile: OnboardingData) -> Optional[Recommendation]:
    if profile.stress_level.lower() not in HIGH_STRESS:
        return None
    return Recommendation(
        title="Daily Stress Management Practice",
        category=GoalCategoryEnum.mental_health,
        description="Develop effective stress management techniques for better well-being",
        plan=(
            "Practice 10-15 minutes of deep breathing or meditation daily, preferably during your "
            f"{profile.peak_productivity_time.lower()} hours"
        ),
        reasoning=(
            "Your high stress level needs attention to support your overall wellness goals "
            "and prevent burnout from your lifestyle changes."
        ),
    )


def _digital_wellness_rule(profile: OnboardingData) -> Optional[Recommendation]:
    if not (profile.screen_time > 6 or profile.mindless_scrolling):
        return None
    return Recommendation(
        title="Digital Wellness Boundaries",
        category=GoalCategoryEnum.productivity,
        description="Create healthy boundaries with technology for better focus and sleep",
        plan="Implement phone-free hours 2 hours before bedtime and use app timers to limit social media to 30 minutes daily",
        reasoning=(
            f"Your current screen time ({profile.screen_time:g} hours) and scrolling habits may interfere "
            "with sleep quality and goal achievement."
        ),
    )


RULES = (_sleep_rule, _nutrition_rule, _stress_rule, _digital_wellness_rule)


def _filler(profile: OnboardingData, current: List[Recommendation]) -> Recommendation:
    if not any(rec.category == GoalCategoryEnum.mental_health for rec in current):
        return Recommendation(
            title="Mindfulness Practice",
            category=GoalCategoryEnum.mental_health,
            description="Cultivate present-moment awareness and emotional balance",
            plan="Practice 5-10 minutes of mindfulness meditation daily, starting with guided apps",
            reasoning=(
                "Mindfulness will support all your other goals by improving focus, reducing reactivity, "
                "and enhancing overall well-being."
            ),
        )
    return Recommendation(
        title="Progressive Goal Achievement",
        category=GoalCategoryEnum.productivity,
        description="Build momentum with small, consistent daily actions",
        plan="Choose one small action from each goal area and do it daily for 21 days to build the habit",
        reasoning=(
            f"Given your preference for '{profile.habit_approach}', starting small will help you build "
            "sustainable momentum toward your goals."
        ),
    )


def generate_smart_recommendations(profile: OnboardingData) -> List[Recommendation]:
    """Deterministic recommendations from fixed profile thresholds.

    Rules run in order and each contributes at most one item. Filler items
    pad the list when fewer than three rules match.
    """
    recommendations = [_fitness_rule(profile)]
    for rule in RULES:
        recommendation = rule(profile)
        if recommendation is not None:
            recommendations.append(recommendation)

    while len(recommendations) < RECOMMENDATION_COUNT:
        recommendations.append(_filler(profile, recommendations))

    return recommendations[:RECOMMENDATION_COUNT]


def normalize_ai_recommendation(raw: Dict[str, Any]) -> Optional[Recommendation]:
    title = str(raw.get("title") or "").strip()
    plan = str(raw.get("plan") or raw.get("actionPlan") or raw.get("weeklyPlan") or "").strip()
    if not title or not plan:
        return None

    category = str(raw.get("category") or "other").strip().lower().replace(" ", "_")
    if category not in GoalCategoryEnum.__members__:
        category = GoalCategoryEnum.other.value

    return Recommendation(
        title=title,
        category=GoalCategoryEnum(category),
        description=str(raw.get("description") or "").strip(),
        plan=plan,
        reasoning=str(raw.get("reasoning") or raw.get("why") or "").strip() or None,
    )


def _top_up(items: List[Recommendation], profile: OnboardingData) -> List[Recommendation]:
    titles = {item.title.lower() for item in items}
    for fallback in generate_smart_recommendations(profile):
        if len(items) >= RECOMMENDATION_COUNT:
            break
        if fallback.title.lower() not in titles:
            items.append(fallback)
            titles.add(fallback.title.lower())
    return items[:RECOMMENDATION_COUNT]


async def generate_recommendations(
    profile: OnboardingData, ai: Optional[AIService] = None
) -> Tuple[List[Recommendation], str]:
    """Exactly three recommendations plus their source ("ai" or "rules").

    AI failures of any kind fall back to the rule table.
    """
    ai = ai or ai_service
    if not ai.is_configured:
        logger.info("AI provider not configured, using rule-based recommendations")
        return generate_smart_recommendations(profile), "rules"

    try:
        raw_items = await ai.generate_goal_recommendations(profile)
    except UpstreamError as e:
        logger.warning("AI recommendations failed, using rule-based fallback: %s", e.message)
        return generate_smart_recommendations(profile), "rules"
    except Exception:
        logger.exception("Unexpected AI recommendation error, using rule-based fallback")
        return generate_smart_recommendations(profile), "rules"

    items = [rec for rec in (normalize_ai_recommendation(raw) for raw in raw_items) if rec is not None]
    if not items:
        logger.warning("AI returned no usable recommendations, using rule-based fallback")
        return generate_smart_recommendations(profile), "rules"

    if len(items) < RECOMMENDATION_COUNT:
        logger.info("AI returned %d usable recommendations, topping up from rules", len(items))
    return _top_up(items[:RECOMMENDATION_COUNT], profile), "ai"


def build_plan_details(recommendation: Recommendation) -> Dict[str, Any]:
    """Plan type plus a week of one daily activity that workout logs are checked against."""
    name, target, unit = DAILY_ACTIVITIES[recommendation.category]
    return {
        "type": PLAN_TYPES[recommendation.category],
        "schedule": [
            {"day": day, "activities": [{"name": name, "targetValue": target, "unit": unit}]}
            for day in range(1, SCHEDULE_DAYS + 1)
        ],
    }
