from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from goalcoach.models.goal import Goal, GoalStatusEnum
from goalcoach.models.progress import Progress

WEEKS = 8
MONTHS = 6
STREAK_DAYS = 30
ACHIEVEMENT_WINDOW_DAYS = 30


def completion_rate(total_goals: int, completed_goals: int) -> float:
    if total_goals <= 0:
        return 0.0
    return round(completed_goals / total_goals * 100, 2)


def average_progress(goals: Sequence[Goal]) -> float:
    """Mean percent-of-target over in-progress goals."""
    active = [g for g in goals if g.status == GoalStatusEnum.in_progress and g.target_value]
    if not active:
        return 0.0
    return round(sum(g.current_progress / g.target_value * 100 for g in active) / len(active), 2)


def build_overview(goals: Sequence[Goal], now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    by_status: Dict[GoalStatusEnum, int] = defaultdict(int)
    for goal in goals:
        by_status[goal.status] += 1

    since = now - timedelta(days=ACHIEVEMENT_WINDOW_DAYS)
    recent = sum(
        1 for g in goals
        if g.status == GoalStatusEnum.completed and g.updated_at is not None and g.updated_at >= since
    )

    total = len(goals)
    completed = by_status[GoalStatusEnum.completed]
    return {
        "total_goals": total,
        "completed_goals": completed,
        "in_progress_goals": by_status[GoalStatusEnum.in_progress],
        "not_started_goals": by_status[GoalStatusEnum.not_started],
        "abandoned_goals": by_status[GoalStatusEnum.abandoned],
        "completion_rate": completion_rate(total, completed),
        "avg_progress": average_progress(goals),
        "recent_achievements": recent,
    }


def week_start(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())


def month_start(day: date, months_back: int = 0) -> date:
    month_index = day.year * 12 + (day.month - 1) - months_back
    return date(month_index // 12, month_index % 12 + 1, 1)


def _next_month(start: date) -> date:
    return month_start(start, -1)


def rollup_start(today: date) -> date:
    """Earliest day any chart bucket or the streak calendar can cover."""
    return min(
        week_start(today) - timedelta(weeks=WEEKS - 1),
        month_start(today, MONTHS - 1),
        today - timedelta(days=STREAK_DAYS - 1),
    )


def _sum_between(entries: Iterable[Progress], start: date, end: date) -> Tuple[float, int]:
    value = 0.0
    count = 0
    for entry in entries:
        if start <= entry.date < end:
            value += entry.value
            count += 1
    return value, count


def weekly_rollup(entries: Sequence[Progress], today: date, weeks: int = WEEKS) -> List[dict]:
    current = week_start(today)
    buckets = []
    for offset in range(weeks - 1, -1, -1):
        start = current - timedelta(weeks=offset)
        value, count = _sum_between(entries, start, start + timedelta(days=7))
        buckets.append({
            "week": start.strftime("%b %d"),
            "start": start.isoformat(),
            "value": value,
            "entries": count,
        })
    return buckets


def monthly_rollup(entries: Sequence[Progress], today: date, months: int = MONTHS) -> List[dict]:
    buckets = []
    for offset in range(months - 1, -1, -1):
        start = month_start(today, offset)
        value, count = _sum_between(entries, start, _next_month(start))
        buckets.append({
            "month": start.strftime("%b %Y"),
            "start": start.isoformat(),
            "value": value,
            "entries": count,
        })
    return buckets


def goals_by_category(goals: Sequence[Goal]) -> List[dict]:
    counts: Dict[str, int] = {}
    for goal in goals:
        key = goal.category.value
        counts[key] = counts.get(key, 0) + 1
    return [
        {"category": category.replace("_", " ").title(), "count": count}
        for category, count in counts.items()
    ]


def streak_calendar(entries: Sequence[Progress], today: date, days: int = STREAK_DAYS) -> List[dict]:
    per_day: Dict[date, List[float]] = defaultdict(list)
    for entry in entries:
        per_day[entry.date].append(entry.value)

    calendar = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        values = per_day.get(day, [])
        calendar.append({
            "date": day.isoformat(),
            "has_progress": bool(values),
            "value": sum(values),
            "entries": len(values),
        })
    return calendar


def compute_streaks(active: Sequence[bool]) -> Tuple[int, int]:
    """(current, longest) runs of active days, oldest day first.

    The current streak ends at the last day and stops at the first gap.
    """
    current = 0
    for is_active in reversed(active):
        if not is_active:
            break
        current += 1

    longest = 0
    run = 0
    for is_active in active:
        run = run + 1 if is_active else 0
        longest = max(longest, run)
    return current, longest


def build_streaks(entries: Sequence[Progress], today: date) -> dict:
    calendar = streak_calendar(entries, today)
    current, longest = compute_streaks([day["has_progress"] for day in calendar])
    return {"current": current, "longest": longest, "calendar": calendar}


def build_analytics(goals: Sequence[Goal], entries: Sequence[Progress], today: Optional[date] = None) -> dict:
    today = today or date.today()
    return {
        "overview": build_overview(goals),
        "charts": {
            "weekly": weekly_rollup(entries, today),
            "monthly": monthly_rollup(entries, today),
            "goals_by_category": goals_by_category(goals),
        },
        "streaks": build_streaks(entries, today),
    }
