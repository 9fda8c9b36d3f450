from fastapi import APIRouter, Depends, status

from goalcoach.core.dependencies import get_current_user, get_user_repository
from goalcoach.core.errors import AuthError
from goalcoach.models.user import User
from goalcoach.repositories.user_repository import UserRepository
from goalcoach.schemas.auth import (
    UserLogin, UserSignup, AuthResponse, RefreshTokenRequest,
    ForgotPasswordRequest, ResetTokenRequest, ResetPasswordRequest, MessageResponse,
)
from goalcoach.schemas.user import UserRead
from goalcoach.services.auth_service import auth_service
from goalcoach.services.email_service import email_service

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a reset link has been sent"


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(user: UserSignup, repo: UserRepository = Depends(get_user_repository)):
    """Register a new user and issue JWT tokens"""
    new_user = await auth_service.register_user(repo, user)
    tokens = await auth_service.issue_tokens(repo, new_user)
    return {**tokens, "user": new_user}


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    authenticated_user = await auth_service.authenticate_user(repo, user)
    if not authenticated_user:
        raise AuthError("Invalid email or password")

    tokens = await auth_service.issue_tokens(repo, authenticated_user)
    return {**tokens, "user": authenticated_user}


@router.post("/refresh", response_model=AuthResponse)
async def refresh_token(request: RefreshTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    """Exchange a refresh token for a new access token"""
    user = await auth_service.verify_refresh_token(repo, request.refresh_token)
    if not user:
        raise AuthError("Invalid or expired refresh token")

    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {
        "access_token": access_token,
        "refresh_token": request.refresh_token,
        "token_type": "bearer",
    }


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest, repo: UserRepository = Depends(get_user_repository)):
    """Same answer whether or not the email is registered"""
    token = await auth_service.create_reset_token(repo, request.email)
    if token:
        await email_service.send_password_reset(request.email, token)
    return {"message": FORGOT_PASSWORD_MESSAGE}


@router.post("/validate-reset-token", response_model=MessageResponse)
async def validate_reset_token(request: ResetTokenRequest, repo: UserRepository = Depends(get_user_repository)):
    await auth_service.validate_reset_token(repo, request.token)
    return {"message": "Token is valid"}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(request: ResetPasswordRequest, repo: UserRepository = Depends(get_user_repository)):
    user = await auth_service.reset_password(repo, request.token, request.password)
    await email_service.send_password_changed(user.email, user.name)
    return {"message": "Password has been reset"}
