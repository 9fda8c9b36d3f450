from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from goalcoach.models.onboarding import OnboardingProfile


class OnboardingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user(self, user_id: int) -> Optional[OnboardingProfile]:
        result = await self.db.execute(
            select(OnboardingProfile).where(OnboardingProfile.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: int, fields: Dict[str, Any]) -> OnboardingProfile:
        """Create the user's profile or overwrite the given fields. Caller commits."""
        profile = await self.get_by_user(user_id)
        if profile is None:
            profile = OnboardingProfile(user_id=user_id)
            self.db.add(profile)
        for field, value in fields.items():
            setattr(profile, field, value)
        await self.db.flush()
        return profile
