from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete

from goalcoach.models.user import User
from goalcoach.models.goal import Goal
from goalcoach.models.progress import Progress
from goalcoach.models.onboarding import OnboardingProfile
from goalcoach.models.recommended_goal import RecommendedGoal
from goalcoach.models.workout_log import WorkoutLog


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_by_reset_token(self, token: str, now: datetime) -> Optional[User]:
        """User holding this reset token, only while it has not expired."""
        result = await self.db.execute(
            select(User).where(
                User.reset_password_token == token,
                User.reset_password_expires > now,
            )
        )
        return result.scalar_one_or_none()

    async def create_user(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def save_refresh_token(self, user: User, refresh_token: str, expires: datetime) -> None:
        user.refresh_token = refresh_token
        user.refresh_token_expires = expires
        await self.db.commit()

    async def save_reset_token(self, user: User, token: str, expires: datetime) -> None:
        user.reset_password_token = token
        user.reset_password_expires = expires
        await self.db.commit()

    async def update_password(self, user: User, hashed_password: str) -> None:
        user.password = hashed_password
        user.reset_password_token = None
        user.reset_password_expires = None
        user.refresh_token = None
        user.refresh_token_expires = None
        await self.db.commit()

    async def delete_user(self, user: User) -> None:
        """Delete the account and everything it owns in one transaction."""
        for model in (WorkoutLog, Progress, RecommendedGoal, Goal, OnboardingProfile):
            await self.db.execute(delete(model).where(model.user_id == user.id))
        await self.db.execute(delete(User).where(User.id == user.id))
        await self.db.commit()
