from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from goalcoach.core.db import get_db
from goalcoach.core.errors import AuthError
from goalcoach.models.user import User
from goalcoach.repositories.user_repository import UserRepository
from goalcoach.services.auth_service import auth_service
from goalcoach.services.goal_service import GoalService
from goalcoach.services.onboarding_service import OnboardingService
from goalcoach.services.recommendation_service import RecommendationService
from goalcoach.services.reporting_service import ReportingService


# auto_error is off so a missing header gets the same 401 body as a bad token
security = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")

    user_id = auth_service.decode_access_token(credentials.credentials)
    user = await repo.get_by_id(user_id)
    if user is None:
        raise AuthError("Invalid access token")

    return user


def get_goal_service(db: AsyncSession = Depends(get_db)) -> GoalService:
    return GoalService(db)


def get_onboarding_service(db: AsyncSession = Depends(get_db)) -> OnboardingService:
    return OnboardingService(db)


def get_recommendation_service(db: AsyncSession = Depends(get_db)) -> RecommendationService:
    return RecommendationService(db)


def get_reporting_service(db: AsyncSession = Depends(get_db)) -> ReportingService:
    return ReportingService(db)
