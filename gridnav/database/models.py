from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utc_now() -> datetime:
    """Naive UTC timestamp, the form SQLite hands back for DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SessionStorageItem(Base):
    """One key/value entry of a browser-session-like storage area.

    Rows are scoped by ``session_id``; a new session id sees none of the
    rows written under another.
    """

    __tablename__ = "session_storage"

    session_id = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:  # pragma: no cover - repr utility
        return f"SessionStorageItem(session_id={self.session_id}, key={self.key})"
