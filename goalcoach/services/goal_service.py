import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from goalcoach.core.errors import NotFoundError, ValidationError
from goalcoach.models.goal import Goal, GoalCategoryEnum, GoalStatusEnum
from goalcoach.models.progress import Progress
from goalcoach.models.user import User
from goalcoach.repositories.goal_repository import GoalRepository
from goalcoach.repositories.progress_repository import ProgressRepository
from goalcoach.schemas.goal import GoalCreate, GoalUpdate
from goalcoach.services.goal_status import clamp_progress, derive_status

logger = logging.getLogger(__name__)


class GoalService:
    """Goal CRUD and the progress consistency rules.

    Every write that touches progress locks the goal row first and commits
    the entry change together with the recomputed total and status.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.goals = GoalRepository(db)
        self.progress = ProgressRepository(db)

    async def create_goal(self, user: User, data: GoalCreate) -> Goal:
        goal = Goal(
            user_id=user.id,
            **data.model_dump(),
            current_progress=0,
            status=GoalStatusEnum.not_started,
        )
        self.goals.add(goal)
        await self.db.commit()
        await self.db.refresh(goal)
        logger.info("Goal %s created for user %s", goal.id, user.id)
        return goal

    async def list_goals(
        self, user: User, category: Optional[GoalCategoryEnum] = None
    ) -> Tuple[List[Goal], Dict[str, int]]:
        goals = await self.goals.list_for_user(user.id, category)
        counts = await self.goals.category_counts(user.id)
        return goals, counts

    async def get_goal(self, user: User, goal_id: int, for_update: bool = False) -> Goal:
        goal = await self.goals.get_for_user(user.id, goal_id, for_update=for_update)
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal

    async def _recompute(self, goal: Goal) -> Goal:
        total = await self.progress.total_for_goal(goal.user_id, goal.id)
        goal.current_progress = clamp_progress(total, goal.target_value)
        goal.status = derive_status(goal.status, goal.current_progress, goal.target_value)
        return goal

    async def record_progress(
        self,
        user: User,
        goal_id: int,
        value: float,
        day: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Tuple[Progress, Goal]:
        if value is None or value < 0:
            raise ValidationError("Invalid progress value")
        day = day or date.today()

        try:
            goal = await self.get_goal(user, goal_id, for_update=True)
            entry = await self.progress.upsert_for_day(user.id, goal.id, day, value, notes)
            await self._recompute(goal)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(goal)
        await self.db.refresh(entry)
        logger.info(
            "Progress %.2f logged for goal %s on %s (total %.2f, %s)",
            value, goal.id, day.isoformat(), goal.current_progress, goal.status.value,
        )
        return entry, goal

    async def update_goal(self, user: User, goal_id: int, data: GoalUpdate) -> Goal:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValidationError("Nothing to update", ["title", "targetValue", "category"])

        try:
            goal = await self.get_goal(user, goal_id, for_update=True)
            for field, value in changes.items():
                setattr(goal, field, value)
            if "target_value" in changes:
                await self._recompute(goal)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(goal)
        return goal

    async def abandon_goal(self, user: User, goal_id: int) -> Goal:
        goal = await self.get_goal(user, goal_id)
        goal.status = GoalStatusEnum.abandoned
        await self.db.commit()
        await self.db.refresh(goal)
        logger.info("Goal %s abandoned by user %s", goal.id, user.id)
        return goal

    async def delete_goal(self, user: User, goal_id: int) -> None:
        goal = await self.get_goal(user, goal_id)
        await self.goals.delete(goal)
        await self.db.commit()
        logger.info("Goal %s and its progress deleted", goal_id)

    async def reset_today_progress(self, user: User, goal_id: int, today: Optional[date] = None) -> Goal:
        """Drop today's entry only, so the total keeps matching the history."""
        today = today or date.today()
        try:
            goal = await self.get_goal(user, goal_id, for_update=True)
            await self.progress.delete_for_day(user.id, goal.id, today)
            await self._recompute(goal)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(goal)
        return goal

    async def list_progress(self, user: User, goal_id: Optional[int] = None, days: int = 30) -> List[Progress]:
        if days < 1:
            raise ValidationError("days must be positive")
        since = date.today() - timedelta(days=days)
        return await self.progress.list_since(user.id, since, goal_id)
