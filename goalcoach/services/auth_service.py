import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import jwt, JWTError

from goalcoach.core.config import settings
from goalcoach.core.errors import AuthError, ValidationError
from goalcoach.models.user import User
from goalcoach.repositories.user_repository import UserRepository
from goalcoach.schemas.auth import UserLogin, UserSignup

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.REFRESH_SECRET_KEY = settings.SECRET_KEY + "_refresh"
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
        self.REFRESH_TOKEN_EXPIRE_DAYS = settings.REFRESH_TOKEN_EXPIRE_DAYS
        self.RESET_TOKEN_EXPIRE_MINUTES = settings.PASSWORD_RESET_EXPIRE_MINUTES
        self.BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def create_refresh_token(self, data: dict) -> str:
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)
        # jti keeps tokens issued within the same second distinct
        to_encode.update({"exp": expire, "jti": secrets.token_hex(8)})
        return jwt.encode(to_encode, self.REFRESH_SECRET_KEY, algorithm=self.ALGORITHM)

    def decode_access_token(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])
            user_id = payload.get("sub")
            if user_id is None:
                raise AuthError("Invalid access token")
            return int(user_id)
        except (JWTError, ValueError) as e:
            raise AuthError("Invalid access token") from e

    async def issue_tokens(self, repo: UserRepository, user: User) -> dict:
        access_token = self.create_access_token(data={"sub": str(user.id)})
        refresh_token = self.create_refresh_token(data={"sub": str(user.id)})
        await repo.save_refresh_token(
            user, refresh_token, datetime.utcnow() + timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)
        )
        return {"access_token": access_token, "refresh_token": refresh_token, "token_type": "bearer"}

    async def verify_refresh_token(self, repo: UserRepository, refresh_token: str) -> Optional[User]:
        try:
            payload = jwt.decode(refresh_token, self.REFRESH_SECRET_KEY, algorithms=[self.ALGORITHM])
            user_id = payload.get("sub")
            if user_id is None:
                return None
        except JWTError:
            return None

        user = await repo.get_by_id(int(user_id))
        if (
            user
            and user.refresh_token == refresh_token
            and user.refresh_token_expires
            and user.refresh_token_expires > datetime.utcnow()
        ):
            return user
        return None

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)
        if not user or not self.verify_password(login_data.password, user.password):
            return None

        user.last_login = datetime.utcnow()
        return user

    async def register_user(self, repo: UserRepository, user_data: UserSignup) -> User:
        email = user_data.email.lower()
        if await repo.get_by_email(email):
            raise ValidationError("User with this email already exists")

        new_user = User(
            email=email,
            name=user_data.name.strip(),
            password=self.hash_password(user_data.password),
            onboarding_completed=False,
            created_at=datetime.utcnow(),
        )
        user = await repo.create_user(new_user)
        logger.info("User %s signed up", user.id)
        return user

    async def create_reset_token(self, repo: UserRepository, email: str) -> Optional[str]:
        """Store a one-hour reset token. None when the email is unknown."""
        user = await repo.get_by_email(email)
        if not user:
            return None

        token = secrets.token_hex(32)
        expires = datetime.utcnow() + timedelta(minutes=self.RESET_TOKEN_EXPIRE_MINUTES)
        await repo.save_reset_token(user, token, expires)
        return token

    async def validate_reset_token(self, repo: UserRepository, token: str) -> User:
        user = await repo.get_by_reset_token(token, datetime.utcnow())
        if not user:
            raise ValidationError("Invalid or expired reset token")
        return user

    async def reset_password(self, repo: UserRepository, token: str, password: str) -> User:
        user = await self.validate_reset_token(repo, token)
        await repo.update_password(user, self.hash_password(password))
        logger.info("Password reset for user %s", user.id)
        return user


auth_service = AuthService()
