from fastapi import APIRouter, Depends

from goalcoach.core.dependencies import get_current_user, get_reporting_service
from goalcoach.models.user import User
from goalcoach.schemas.dashboard import DashboardResponse
from goalcoach.services.reporting_service import ReportingService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
        current_user: User = Depends(get_current_user),
        service: ReportingService = Depends(get_reporting_service),
):
    return await service.dashboard(current_user)
