"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Values are read when a Settings instance is
built, so tests can adjust the environment between calls.
"""

import os
import uuid
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))

STORAGE_BACKENDS = ("memory", "file", "sqlite")


def _env(name: str, default: Optional[str] = None):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:
    # Storage
    storage_backend: str = _env("GRIDNAV_STORAGE_BACKEND", "memory")
    storage_dir: str = _env(
        "GRIDNAV_STORAGE_DIR", os.path.join(PROJECT_ROOT, "data", "sessions")
    )
    database_url: str = _env(
        "GRIDNAV_DATABASE_URL",
        "sqlite:///" + os.path.join(PROJECT_ROOT, "data", "gridnav.db"),
    )
    storage_key: str = _env("GRIDNAV_STORAGE_KEY", "grid-navigation-storage")

    # Session identity: a fresh id means a fresh (empty) session
    session_id: Optional[str] = _env("GRIDNAV_SESSION_ID")

    # Navigation history
    snapshot_max_age_ms: int = field(
        default_factory=lambda: int(
            os.getenv("GRIDNAV_SNAPSHOT_MAX_AGE_MS", str(30 * 60 * 1000))
        )
    )

    # Logging
    log_level: str = _env("GRIDNAV_LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        self.storage_backend = (self.storage_backend or "memory").lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.storage_backend!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )
        if not self.session_id:
            self.session_id = new_session_id()


def new_session_id() -> str:
    return uuid.uuid4().hex


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
