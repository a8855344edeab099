"""Thin repository helpers for session-scoped key/value rows.

These functions provide a small abstraction over SQLAlchemy sessions so the
storage backend never builds queries itself.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from .models import SessionStorageItem, utc_now


def get_item(session: Session, session_id: str, key: str) -> Optional[str]:
    """Return the stored value, or None if the key was never written."""
    row = session.get(SessionStorageItem, (session_id, key))
    return row.value if row is not None else None


def set_item(session: Session, session_id: str, key: str, value: str) -> SessionStorageItem:
    """Insert or overwrite a value."""
    row = session.get(SessionStorageItem, (session_id, key))
    if row is None:
        row = SessionStorageItem(session_id=session_id, key=key, value=value)
        session.add(row)
    else:
        row.value = value
        row.updated_at = utc_now()
    session.commit()
    return row


def delete_item(session: Session, session_id: str, key: str) -> bool:
    """Delete a single value. Returns True if it existed."""
    row = session.get(SessionStorageItem, (session_id, key))
    if row is None:
        return False
    session.delete(row)
    session.commit()
    return True


def delete_session(session: Session, session_id: str) -> int:
    """Delete every value written under ``session_id``. Returns the row count."""
    result = session.execute(
        delete(SessionStorageItem).where(SessionStorageItem.session_id == session_id)
    )
    session.commit()
    return result.rowcount or 0


def purge_stale_sessions(session: Session, older_than: datetime) -> int:
    """Delete rows not touched since ``older_than`` (abandoned sessions).

    ``older_than`` is naive UTC, like the stored timestamps.
    """
    result = session.execute(
        delete(SessionStorageItem).where(SessionStorageItem.updated_at < older_than)
    )
    session.commit()
    return result.rowcount or 0
