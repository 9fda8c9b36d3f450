import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from goalcoach.models.onboarding import OnboardingProfile
from goalcoach.models.user import User
from goalcoach.repositories.onboarding_repository import OnboardingRepository
from goalcoach.schemas.onboarding import OnboardingData

logger = logging.getLogger(__name__)

PROFILE_FIELDS = tuple(OnboardingData.model_fields)


def profile_to_data(profile: Optional[OnboardingProfile]) -> OnboardingData:
    """Stored answers over the questionnaire defaults."""
    if profile is None:
        return OnboardingData()
    stored = {
        field: getattr(profile, field)
        for field in PROFILE_FIELDS
        if getattr(profile, field, None) is not None
    }
    return OnboardingData(**stored)


class OnboardingService:
    """Owns the single survey record each user has."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.profiles = OnboardingRepository(db)

    async def get_profile_data(self, user: User) -> OnboardingData:
        return profile_to_data(await self.profiles.get_by_user(user.id))

    async def save(self, user: User, fields: Dict[str, Any], complete: bool = False) -> OnboardingData:
        fields = {key: value for key, value in fields.items() if key in PROFILE_FIELDS}
        profile = await self.profiles.upsert(user.id, fields)
        if complete:
            user.onboarding_completed = True
        await self.db.commit()
        await self.db.refresh(profile)
        logger.info("Onboarding profile saved for user %s (complete=%s)", user.id, complete)
        return profile_to_data(profile)
