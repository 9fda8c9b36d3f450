from pydantic import EmailStr
from typing import Optional
from datetime import datetime

from goalcoach.schemas.base import CamelModel


class UserRead(CamelModel):
    id: int
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None
    onboarding_completed: bool = False
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserProfileUpdate(CamelModel):
    name: Optional[str] = None
    image: Optional[str] = None


class AccountDeleteRequest(CamelModel):
    password: str
