"""Database models and session management for SQL-backed session storage."""
from .engine import DB_PATH, get_engine, init_db, make_session_factory
from .models import Base, SessionStorageItem
from .repository import (
    delete_item,
    delete_session,
    get_item,
    purge_stale_sessions,
    set_item,
)

__all__ = [
    "DB_PATH",
    "get_engine",
    "init_db",
    "make_session_factory",
    "Base",
    "SessionStorageItem",
    "delete_item",
    "delete_session",
    "get_item",
    "purge_stale_sessions",
    "set_item",
]
