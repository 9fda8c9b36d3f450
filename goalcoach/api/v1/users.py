import logging

from fastapi import APIRouter, Depends

from goalcoach.core.dependencies import get_current_user, get_onboarding_service, get_user_repository
from goalcoach.core.errors import ValidationError
from goalcoach.models.user import User
from goalcoach.repositories.user_repository import UserRepository
from goalcoach.schemas.auth import MessageResponse
from goalcoach.schemas.onboarding import OnboardingData, OnboardingPartial
from goalcoach.schemas.user import UserRead, UserProfileUpdate, AccountDeleteRequest
from goalcoach.services.auth_service import auth_service
from goalcoach.services.onboarding_service import OnboardingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile", response_model=UserRead)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserRead)
async def update_profile(
        profile_data: UserProfileUpdate,
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository),
):
    changes = profile_data.model_dump(exclude_unset=True)
    if "name" in changes and not (changes["name"] or "").strip():
        raise ValidationError("Name cannot be empty")
    for field, value in changes.items():
        setattr(current_user, field, value.strip() if field == "name" else value)
    return await repo.save(current_user)


@router.get("/preferences", response_model=OnboardingData)
async def get_preferences(
        current_user: User = Depends(get_current_user),
        service: OnboardingService = Depends(get_onboarding_service),
):
    """Stored survey answers, questionnaire defaults for anything unanswered"""
    return await service.get_profile_data(current_user)


@router.put("/preferences", response_model=OnboardingData)
async def update_preferences(
        preferences: OnboardingPartial,
        current_user: User = Depends(get_current_user),
        service: OnboardingService = Depends(get_onboarding_service),
):
    return await service.save(current_user, preferences.model_dump(exclude_none=True))


@router.delete("", response_model=MessageResponse)
async def delete_account(
        request: AccountDeleteRequest,
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository),
):
    """Removes the account with its goals, progress, recommendations and logs"""
    if not auth_service.verify_password(request.password, current_user.password):
        raise ValidationError("Incorrect password")

    user_id = current_user.id
    await repo.delete_user(current_user)
    logger.info("Account %s deleted", user_id)
    return {"message": "Account deleted"}
