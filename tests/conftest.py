"""
Shared fixtures for the goalcoach test suite.

Approach:
- The test FastAPI app is built without startup events (no database bootstrap).
- Auth endpoint tests replace UserRepository with an AsyncMock (mock_repo).
- Service and endpoint tests that need real persistence run against an
  in-memory SQLite database through aiosqlite; get_db is overridden to hand
  out sessions bound to that engine.
- JWTs are minted with auth_service.create_access_token() so requests go
  through the real get_current_user dependency.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["AI_API_KEY"] = ""
os.environ.pop("SMTP_HOST", None)

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator, Callable
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import goalcoach.models  # noqa: F401
from goalcoach.api.router import api_router
from goalcoach.core.base import Base
from goalcoach.core.db import get_db
from goalcoach.core.dependencies import get_user_repository
from goalcoach.core.errors import register_exception_handlers
from goalcoach.models.user import User
from goalcoach.repositories.user_repository import UserRepository
from goalcoach.services.auth_service import auth_service


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Test FastAPI app without startup events."""
    test_app = FastAPI(title="GoalCoach Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api")
    return test_app


def make_auth_headers(user: User) -> dict:
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    return make_auth_headers


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Detached user for mocked-repository tests."""
    return User(
        id=1,
        email="test@example.com",
        name="Tester",
        password=auth_service.hash_password("password123"),
        onboarding_completed=False,
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Mocked repository
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    return AsyncMock(spec=UserRepository)


@pytest.fixture
async def client(mock_repo) -> AsyncGenerator[AsyncClient, None]:
    """get_user_repository -> mock_repo. Used for the auth endpoints."""
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# In-memory SQLite
# ---------------------------------------------------------------------------

@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def db_user(db_session) -> User:
    user = User(
        email="walker@example.com",
        name="Walker",
        password=auth_service.hash_password("password123"),
        onboarding_completed=False,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def db_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Full app over the in-memory database; authenticate with auth_headers(user)."""
    app = create_test_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
