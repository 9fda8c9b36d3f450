from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from goalcoach.models.recommended_goal import RecommendedGoal, RecommendationStatusEnum


class RecommendationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_for_user(self, user_id: int, recommendation_id: int, for_update: bool = False) -> Optional[RecommendedGoal]:
        query = select(RecommendedGoal).where(
            RecommendedGoal.id == recommendation_id,
            RecommendedGoal.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_suggested(self, user_id: int) -> List[RecommendedGoal]:
        result = await self.db.execute(
            select(RecommendedGoal)
            .where(
                RecommendedGoal.user_id == user_id,
                RecommendedGoal.status == RecommendationStatusEnum.suggested,
            )
            .order_by(RecommendedGoal.created_at.desc(), RecommendedGoal.id.desc())
        )
        return list(result.scalars().all())

    async def status_counts(self, user_id: int) -> Dict[str, int]:
        result = await self.db.execute(
            select(RecommendedGoal.status, func.count(RecommendedGoal.id))
            .where(RecommendedGoal.user_id == user_id)
            .group_by(RecommendedGoal.status)
        )
        return {status.value: count for status, count in result.all()}

    def add_all(self, recommendations: List[RecommendedGoal]) -> None:
        self.db.add_all(recommendations)
