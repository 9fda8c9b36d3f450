from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from goalcoach.core.dependencies import get_current_user, get_goal_service
from goalcoach.models.goal import GoalCategoryEnum
from goalcoach.models.user import User
from goalcoach.schemas.goal import (
    GoalCreate, GoalUpdate, GoalRead, GoalListResponse, GoalActionResponse, SuccessResponse,
)
from goalcoach.schemas.progress import ProgressValue, GoalProgressResponse
from goalcoach.services.goal_service import GoalService

router = APIRouter()


@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
        goal_data: GoalCreate,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    return await service.create_goal(current_user, goal_data)


@router.get("", response_model=GoalListResponse)
async def list_goals(
        category: Optional[GoalCategoryEnum] = Query(None),
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    goals, counts = await service.list_goals(current_user, category)
    return {"goals": goals, "category_counts": counts}


@router.get("/{goal_id}", response_model=GoalRead)
async def get_goal(
        goal_id: int,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    return await service.get_goal(current_user, goal_id)


@router.put("/{goal_id}", response_model=GoalRead)
async def update_goal(
        goal_id: int,
        goal_data: GoalUpdate,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    """Only title, targetValue and category can change"""
    return await service.update_goal(current_user, goal_id, goal_data)


@router.delete("/{goal_id}", response_model=SuccessResponse)
async def delete_goal(
        goal_id: int,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    await service.delete_goal(current_user, goal_id)
    return {"success": True}


@router.post("/{goal_id}/abandon", response_model=GoalActionResponse)
async def abandon_goal(
        goal_id: int,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    goal = await service.abandon_goal(current_user, goal_id)
    return {"success": True, "goal": goal}


@router.api_route("/{goal_id}/progress", methods=["POST", "PUT"], response_model=GoalProgressResponse)
async def record_goal_progress(
        goal_id: int,
        progress_data: ProgressValue,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    """Log the value for one day. Logging the same day again replaces it."""
    entry, goal = await service.record_progress(
        current_user, goal_id, progress_data.value, progress_data.date, progress_data.notes_change()
    )
    return {"success": True, "progress": entry, "goal": goal}


@router.post("/{goal_id}/reset-today", response_model=GoalActionResponse)
async def reset_today_progress(
        goal_id: int,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    goal = await service.reset_today_progress(current_user, goal_id)
    return {"success": True, "goal": goal}
