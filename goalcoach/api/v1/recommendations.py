from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from goalcoach.core.dependencies import get_current_user, get_recommendation_service
from goalcoach.models.user import User
from goalcoach.schemas.recommendation import (
    GenerateRecommendationsRequest, GenerateRecommendationsResponse, RecommendedGoalRead,
    AcceptRecommendationResponse, DeclineRecommendationResponse,
)
from goalcoach.schemas.workout_log import WorkoutLogCreate, WorkoutLogRead, WorkoutHistoryResponse
from goalcoach.services.recommendation_service import RecommendationService
router = APIRouter()


@router.get("", response_model=List[RecommendedGoalRead])
async def list_recommendations(
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    """Suggestions still waiting for a decision"""
    return await service.list_suggested(current_user)


@router.post("/generate", response_model=GenerateRecommendationsResponse)
async def generate_recommendations(
        request: Optional[GenerateRecommendationsRequest] = Body(None),
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    """Always three goals; the AI provider is tried first, the rule table covers its failures."""
    profile = request.onboarding_data if request else None
    goals = await service.generate(current_user, profile)
    return {"goals": goals}


@router.post("/{recommendation_id}/accept", response_model=AcceptRecommendationResponse)
async def accept_recommendation(
        recommendation_id: int,
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    goal = await service.accept(current_user, recommendation_id)
    return {"message": "Recommendation accepted", "goal": goal}


@router.post("/{recommendation_id}/decline", response_model=DeclineRecommendationResponse)
async def decline_recommendation(
        recommendation_id: int,
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    await service.decline(current_user, recommendation_id)
    return {"message": "Recommendation declined"}


@router.post(
    "/{recommendation_id}/workout-logs",
    response_model=WorkoutLogRead,
    status_code=status.HTTP_201_CREATED,
)
async def log_workout(
        recommendation_id: int,
        log_data: WorkoutLogCreate,
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    return await service.log_workout(current_user, recommendation_id, log_data)


@router.get("/{recommendation_id}/history", response_model=WorkoutHistoryResponse)
async def workout_history(
        recommendation_id: int,
        start_date: Optional[datetime] = Query(None, alias="startDate"),
        end_date: Optional[datetime] = Query(None, alias="endDate"),
        activity_name: Optional[str] = Query(None, alias="activityName"),
        current_user: User = Depends(get_current_user),
        service: RecommendationService = Depends(get_recommendation_service),
):
    """Latest logs and per-activity totals for one recommended plan"""
    history = await service.history(current_user, recommendation_id, start_date, end_date, activity_name)
    return {"success": True, **history}
