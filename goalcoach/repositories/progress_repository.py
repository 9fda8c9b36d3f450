from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete

from goalcoach.models.progress import Progress


class ProgressRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_day(self, user_id: int, goal_id: int, day: date) -> Optional[Progress]:
        result = await self.db.execute(
            select(Progress).where(
                Progress.user_id == user_id,
                Progress.goal_id == goal_id,
                Progress.date == day,
            )
        )
        return result.scalar_one_or_none()

    async def upsert_for_day(
        self, user_id: int, goal_id: int, day: date, value: float, notes: Optional[str] = None
    ) -> Progress:
        """Single entry per (user, goal, day): re-logging a day overwrites its value.

        notes=None leaves stored notes alone and an empty string clears them.
        """
        entry = await self.get_for_day(user_id, goal_id, day)
        if entry is None:
            entry = Progress(user_id=user_id, goal_id=goal_id, date=day, value=value, notes=notes or None)
            self.db.add(entry)
        else:
            entry.value = value
            if notes is not None:
                entry.notes = notes or None
        await self.db.flush()
        return entry

    async def delete_for_day(self, user_id: int, goal_id: int, day: date) -> int:
        result = await self.db.execute(
            delete(Progress).where(
                Progress.user_id == user_id,
                Progress.goal_id == goal_id,
                Progress.date == day,
            )
        )
        return result.rowcount or 0

    async def total_for_goal(self, user_id: int, goal_id: int) -> float:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Progress.value), 0))
            .where(Progress.user_id == user_id, Progress.goal_id == goal_id)
        )
        return float(result.scalar_one())

    async def list_since(self, user_id: int, since: date, goal_id: Optional[int] = None) -> List[Progress]:
        query = select(Progress).where(Progress.user_id == user_id, Progress.date >= since)
        if goal_id is not None:
            query = query.where(Progress.goal_id == goal_id)
        result = await self.db.execute(query.order_by(Progress.date.desc(), Progress.id.desc()))
        return list(result.scalars().all())
