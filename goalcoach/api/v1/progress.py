from typing import Optional

from fastapi import APIRouter, Depends, Query

from goalcoach.core.dependencies import get_current_user, get_goal_service
from goalcoach.models.user import User
from goalcoach.schemas.progress import ProgressLogRequest, ProgressLogResponse, ProgressListResponse
from goalcoach.services.goal_service import GoalService

router = APIRouter()


@router.post("", response_model=ProgressLogResponse)
async def log_progress(
        progress_data: ProgressLogRequest,
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    entry, goal = await service.record_progress(
        current_user,
        progress_data.goal_id,
        progress_data.value,
        progress_data.date,
        progress_data.notes_change(),
    )
    return {"success": True, "progress": entry, "goal": goal}


@router.get("", response_model=ProgressListResponse)
async def list_progress(
        goal_id: Optional[int] = Query(None, alias="goalId"),
        days: int = Query(30, ge=1, le=365),
        current_user: User = Depends(get_current_user),
        service: GoalService = Depends(get_goal_service),
):
    entries = await service.list_progress(current_user, goal_id, days)
    return {"success": True, "progress": entries}
