import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from goalcoach.core.base import Base
from goalcoach.core.config import settings

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None
_schema_ready = False
_schema_lock = asyncio.Lock()


def normalize_database_url(url: str) -> str:
    """Pick the async driver for plain postgres/sqlite URLs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first use and reused afterwards."""
    global _engine
    if _engine is None:
        url = normalize_database_url(settings.DATABASE_URL)
        kwargs = {"echo": settings.SQL_ECHO, "future": True}
        if not url.startswith("sqlite"):
            kwargs["pool_pre_ping"] = True
        _engine = create_async_engine(url, **kwargs)
        logger.info("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )
    return _session_factory


async def init_database(engine: Optional[AsyncEngine] = None) -> None:
    """Create tables once; concurrent callers wait for the first one."""
    global _schema_ready
    if _schema_ready:
        return

    async with _schema_lock:
        if _schema_ready:
            return

        # models must be imported so their tables are registered on Base.metadata
        import goalcoach.models  # noqa: F401

        async with (engine or get_engine()).begin() as conn:
            if settings.RESET_DATABASE:
                logger.warning("RESET_DATABASE=true, dropping all tables")
                await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

        _schema_ready = True
        logger.info("Database tables created/verified")


async def dispose_engine() -> None:
    global _engine, _session_factory, _schema_ready
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
    _schema_ready = False


async def get_db():
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()
