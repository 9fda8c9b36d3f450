from goalcoach.core.config import settings
from goalcoach.core.base import Base
from goalcoach.core.db import get_engine, get_db, init_database

__all__ = ["settings", "get_engine", "Base", "get_db", "init_database"]
