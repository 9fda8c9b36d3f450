from pydantic import EmailStr, Field
from typing import Optional

from goalcoach.schemas.base import CamelModel
from goalcoach.schemas.user import UserRead


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserSignup(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)


class AuthResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserRead] = None


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetTokenRequest(CamelModel):
    token: str = Field(min_length=1)


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=8)


class MessageResponse(CamelModel):
    message: str
