from fastapi import APIRouter
from goalcoach.api.v1.auth import router as auth_router
from goalcoach.api.v1.goals import router as goals_router
from goalcoach.api.v1.progress import router as progress_router
from goalcoach.api.v1.analytics import router as analytics_router
from goalcoach.api.v1.dashboard import router as dashboard_router
from goalcoach.api.v1.recommendations import router as recommendations_router
from goalcoach.api.v1.onboarding import router as onboarding_router
from goalcoach.api.v1.users import router as users_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(goals_router, prefix="/goals", tags=["goals"])
api_router.include_router(progress_router, prefix="/progress", tags=["progress"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(recommendations_router, prefix="/recommended-goals", tags=["recommendations"])
api_router.include_router(onboarding_router, prefix="/onboarding", tags=["onboarding"])
api_router.include_router(users_router, prefix="/user", tags=["user"])
