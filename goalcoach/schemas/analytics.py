from typing import List

from goalcoach.schemas.base import CamelModel


class AnalyticsOverview(CamelModel):
    total_goals: int
    completed_goals: int
    in_progress_goals: int
    not_started_goals: int
    abandoned_goals: int
    completion_rate: float
    avg_progress: float
    recent_achievements: int


class WeeklyBucket(CamelModel):
    week: str
    start: str
    value: float
    entries: int


class MonthlyBucket(CamelModel):
    month: str
    start: str
    value: float
    entries: int


class CategoryCount(CamelModel):
    category: str
    count: int


class AnalyticsCharts(CamelModel):
    weekly: List[WeeklyBucket]
    monthly: List[MonthlyBucket]
    goals_by_category: List[CategoryCount]


class CalendarDay(CamelModel):
    date: str
    has_progress: bool
    value: float
    entries: int


class Streaks(CamelModel):
    current: int
    longest: int
    calendar: List[CalendarDay]


class AnalyticsResponse(CamelModel):
    overview: AnalyticsOverview
    charts: AnalyticsCharts
    streaks: Streaks
