from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete

from goalcoach.models.goal import Goal, GoalCategoryEnum
from goalcoach.models.progress import Progress


class GoalRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(self, user_id: int, goal_id: int, for_update: bool = False) -> Optional[Goal]:
        query = select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int, category: Optional[GoalCategoryEnum] = None) -> List[Goal]:
        query = select(Goal).where(Goal.user_id == user_id)
        if category is not None:
            query = query.where(Goal.category == category)
        result = await self.db.execute(query.order_by(Goal.created_at.desc(), Goal.id.desc()))
        return list(result.scalars().all())

    async def category_counts(self, user_id: int) -> Dict[str, int]:
        result = await self.db.execute(
            select(Goal.category, func.count(Goal.id))
            .where(Goal.user_id == user_id)
            .group_by(Goal.category)
        )
        return {category.value: count for category, count in result.all()}

    def add(self, goal: Goal) -> Goal:
        self.db.add(goal)
        return goal

    async def delete(self, goal: Goal) -> None:
        await self.db.execute(
            delete(Progress).where(Progress.goal_id == goal.id, Progress.user_id == goal.user_id)
        )
        await self.db.execute(delete(Goal).where(Goal.id == goal.id))
