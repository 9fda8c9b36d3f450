import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from goalcoach.core.config import settings
from goalcoach.core.errors import UpstreamError
from goalcoach.schemas.onboarding import OnboardingData

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that provides fitness and wellness goal "
    "recommendations in JSON format."
)

FIELD_LABELS = ("title", "category", "description", "plan", "reasoning")


def _join(values: Optional[List[str]], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def build_recommendation_prompt(profile: OnboardingData) -> str:
    return f"""As a fitness and wellness expert, analyze this user profile and generate exactly 3 personalized, actionable fitness/wellness goals. Format the response as JSON with the following structure:

{{
  "recommendations": [
    {{
      "title": "Goal Title",
      "category": "fitness|nutrition|mental_health|productivity|sleep|other",
      "description": "Brief description of the goal",
      "plan": "Specific actionable plan",
      "reasoning": "Why this goal fits the user's profile"
    }}
  ]
}}

User Profile:
- Primary Goals: {_join(profile.goals, 'General wellness')}
- Goal Importance (1-5): {profile.goal_importance}
- Success Definition: {profile.success_definition or 'Not specified'}
- Sleep: {profile.sleep_hours} hours, Quality: {profile.sleep_quality}, Consistent: {profile.consistent_sleep}
- Eating Habits: {profile.eating_habits}
- Water Intake: {profile.water_intake} glasses/day
- Physical Activity: {profile.physical_activity}
- Stress Level: {profile.stress_level}
- Relaxation Frequency: {profile.relaxation_frequency}
- Mindfulness Practice: {'Yes' if profile.mindfulness_practice else 'No'}
- Screen Time: {profile.screen_time} hours/day
- Mindless Scrolling: {'Yes' if profile.mindless_scrolling else 'No'}
- Existing Good Habits: {_join(profile.existing_good_habits, 'None specified')}
- Habits to Break: {_join(profile.habits_to_break, 'None specified')}
- Main Obstacles: {_join(profile.obstacles, 'None specified')}
- Discipline Level (1-5): {profile.discipline_level}
- Peak Productivity: {profile.peak_productivity_time}
- Reminder Preference: {profile.reminder_preference}
- Habit Approach: {profile.habit_approach}
- Daily Time Commitment: {profile.daily_time_commitment}
- Motivation Factors: {_join(profile.motivation_factors, 'None specified')}
- Age Range: {profile.age_range or 'Not specified'}
- Gender: {profile.gender or 'Not specified'}
- Occupation: {profile.occupation or 'Not specified'}

Please provide 3 specific, personalized recommendations that:
1. Address the user's stated goals and challenges
2. Are realistic given their time commitment and discipline level
3. Build on their existing good habits
4. Help overcome their stated obstacles
5. Match their preferred approach and productivity time

Focus on creating SMART goals that are specific, measurable, achievable, relevant, and time-bound."""


def parse_recommendations(text: str) -> List[Dict[str, Any]]:
    """Pull recommendation dicts out of a model reply.

    Tries a JSON object first, then "Title: ..." style lines.
    """
    match = re.search(r"\{[\s\S]*\}", text)
    if match:
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            items = parsed.get("recommendations")
            if isinstance(items, list):
                return [item for item in items if isinstance(item, dict)][:3]

    recommendations: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}
    for line in text.splitlines():
        stripped = line.strip().lstrip("-*0123456789. ").strip()
        if ":" not in stripped:
            continue
        label, _, value = stripped.partition(":")
        label = label.strip().strip("*").lower()
        if label not in FIELD_LABELS:
            continue
        if label == "title" and current.get("title"):
            recommendations.append(current)
            current = {}
        current[label] = value.strip().strip("*").strip()
    if current.get("title"):
        recommendations.append(current)

    if not recommendations:
        raise UpstreamError("Could not parse AI recommendations")
    return recommendations[:3]


class AIService:
    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.AI_API_KEY
        self.base_url = base_url or settings.AI_BASE_URL
        self.model = model or settings.AI_MODEL
        self.timeout = settings.AI_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _make_request(self, prompt: str) -> str:
        if not self.api_key:
            raise UpstreamError("AI provider is not configured, set AI_API_KEY")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.base_url,
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.api_key}",
                    },
                    json={
                        "model": self.model,
                        "messages": [
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt},
                        ],
                        "temperature": 0.7,
                        "max_tokens": 2048,
                        "response_format": {"type": "json_object"},
                        "stream": False,
                    },
                )
        except httpx.TimeoutException as e:
            raise UpstreamError("AI provider timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"AI provider connection failed: {e}") from e

        if response.status_code != 200:
            message = f"AI provider returned {response.status_code}"
            try:
                message += f" - {response.json()['error']['message']}"
            except (ValueError, KeyError, TypeError):
                message += f" - {response.text[:200]}"
            raise UpstreamError(message)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError("Unexpected AI response format") from e
        if not content:
            raise UpstreamError("AI provider returned an empty response")

        logger.debug("AI raw response: %s", content)
        return content

    async def generate_goal_recommendations(self, profile: OnboardingData) -> List[Dict[str, Any]]:
        prompt = build_recommendation_prompt(profile)
        logger.info("Requesting AI recommendations for goals: %s", _join(profile.goals, "general wellness"))
        response = await self._make_request(prompt)
        return parse_recommendations(response)


ai_service = AIService()
