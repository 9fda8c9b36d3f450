from fastapi import APIRouter, Depends

from goalcoach.core.dependencies import get_current_user, get_onboarding_service
from goalcoach.models.user import User
from goalcoach.schemas.onboarding import OnboardingData, OnboardingPartial, OnboardingResponse
from goalcoach.services.onboarding_service import OnboardingService

router = APIRouter()


@router.post("", response_model=OnboardingResponse)
async def complete_onboarding(
        onboarding_data: OnboardingData,
        current_user: User = Depends(get_current_user),
        service: OnboardingService = Depends(get_onboarding_service),
):
    profile = await service.save(current_user, onboarding_data.model_dump(), complete=True)
    return {
        "message": "Onboarding completed",
        "onboarding_completed": True,
        "profile": profile,
    }


@router.post("/partial", response_model=OnboardingResponse)
async def save_partial_onboarding(
        onboarding_data: OnboardingPartial,
        current_user: User = Depends(get_current_user),
        service: OnboardingService = Depends(get_onboarding_service),
):
    """Save answers between steps without finishing onboarding"""
    profile = await service.save(current_user, onboarding_data.model_dump(exclude_none=True))
    return {
        "message": "Onboarding progress saved",
        "onboarding_completed": bool(current_user.onboarding_completed),
        "profile": profile,
    }
