from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case

from goalcoach.models.workout_log import WorkoutLog


class WorkoutLogRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _filters(
        self,
        user_id: int,
        recommended_goal_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        activity_name: Optional[str] = None,
    ) -> list:
        filters = [WorkoutLog.user_id == user_id, WorkoutLog.recommended_goal_id == recommended_goal_id]
        if start is not None:
            filters.append(WorkoutLog.date >= start)
        if end is not None:
            filters.append(WorkoutLog.date <= end)
        if activity_name:
            filters.append(WorkoutLog.activity_name == activity_name)
        return filters

    async def amount_logged_between(
        self, user_id: int, recommended_goal_id: int, activity_index: int, day_index: int,
        start: datetime, end: datetime,
    ) -> float:
        result = await self.db.execute(
            select(func.coalesce(func.sum(WorkoutLog.amount_logged), 0)).where(
                WorkoutLog.user_id == user_id,
                WorkoutLog.recommended_goal_id == recommended_goal_id,
                WorkoutLog.day_index == day_index,
                WorkoutLog.activity_index == activity_index,
                WorkoutLog.date >= start,
                WorkoutLog.date < end,
            )
        )
        return float(result.scalar_one())

    def add(self, log: WorkoutLog) -> WorkoutLog:
        self.db.add(log)
        return log

    async def list_logs(
        self,
        user_id: int,
        recommended_goal_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        activity_name: Optional[str] = None,
        limit: int = 100,
    ) -> List[WorkoutLog]:
        result = await self.db.execute(
            select(WorkoutLog)
            .where(*self._filters(user_id, recommended_goal_id, start, end, activity_name))
            .order_by(WorkoutLog.date.desc(), WorkoutLog.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def activity_stats(
        self,
        user_id: int,
        recommended_goal_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        activity_name: Optional[str] = None,
    ) -> list:
        result = await self.db.execute(
            select(
                WorkoutLog.activity_name,
                func.sum(WorkoutLog.amount_logged),
                func.avg(WorkoutLog.amount_logged),
                func.count(WorkoutLog.id),
                func.sum(case((WorkoutLog.is_daily_target_met.is_(True), 1), else_=0)),
            )
            .where(*self._filters(user_id, recommended_goal_id, start, end, activity_name))
            .group_by(WorkoutLog.activity_name)
            .order_by(WorkoutLog.activity_name)
        )
        return [
            {
                "activity_name": name,
                "total_amount": float(total or 0),
                "average_amount": float(avg or 0),
                "total_entries": int(count or 0),
                "days_completed": int(completed or 0),
            }
            for name, total, avg, count, completed in result.all()
        ]
