from fastapi import APIRouter, Depends

from goalcoach.core.dependencies import get_current_user, get_reporting_service
from goalcoach.models.user import User
from goalcoach.schemas.analytics import AnalyticsResponse
from goalcoach.services.reporting_service import ReportingService

router = APIRouter()


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
        current_user: User = Depends(get_current_user),
        service: ReportingService = Depends(get_reporting_service),
):
    """Overview, weekly/monthly charts and the 30-day streak calendar"""
    return await service.analytics(current_user)
