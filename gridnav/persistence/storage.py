"""Session-scoped key/value storage backends.

All backends share the same tiny surface (``get_item``/``set_item``/
``remove_item``, string values). A storage area belongs to one session: it
survives a reload of the same session and is invisible to any other.
"""

from __future__ import annotations

import json
import os
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from gridnav.database import repository
from gridnav.database.models import utc_now
from gridnav.exceptions import StorageError
from gridnav.utils.logger import get_logger

if TYPE_CHECKING:
    from gridnav.config import Settings

logger = get_logger(__name__)


class SessionStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySessionStorage:
    """Dict-backed storage that lives as long as the process."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class JsonFileSessionStorage:
    """
    One JSON document per session.

    Directory layout::

        {directory}/
            {session_id}.json     # {"<key>": "<value>", ...}
    """

    def __init__(self, directory: str, session_id: str) -> None:
        self._dir = Path(directory)
        self.session_id = session_id

    @property
    def path(self) -> Path:
        return self._dir / f"{self.session_id}.json"

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read session file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Session file {self.path} does not hold an object")
        return data

    def _save(self, items: Dict[str, str]) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".json.tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write session file {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._load_for_write()
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = self._load_for_write()
        if key in items:
            del items[key]
            self._save(items)

    def end_session(self) -> None:
        """Delete the whole session document."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def _load_for_write(self) -> Dict[str, str]:
        # A corrupt document is replaced rather than blocking every write.
        try:
            return self._load()
        except StorageError as exc:
            logger.warning("Discarding unreadable session file: %s", exc)
            return {}


class SqlSessionStorage:
    """Rows in the ``session_storage`` table, scoped by session id."""

    def __init__(self, session_factory: sessionmaker, session_id: str) -> None:
        self._session_factory = session_factory
        self.session_id = session_id

    def get_item(self, key: str) -> Optional[str]:
        session = self._session_factory()
        try:
            return repository.get_item(session, self.session_id, key)
        except SQLAlchemyError as exc:
            raise StorageError(f"Cannot read {key!r}: {exc}") from exc
        finally:
            session.close()

    def set_item(self, key: str, value: str) -> None:
        session = self._session_factory()
        try:
            repository.set_item(session, self.session_id, key, value)
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Cannot write {key!r}: {exc}") from exc
        finally:
            session.close()

    def remove_item(self, key: str) -> None:
        session = self._session_factory()
        try:
            repository.delete_item(session, self.session_id, key)
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"Cannot remove {key!r}: {exc}") from exc
        finally:
            session.close()

    def end_session(self) -> int:
        """Delete every row of this session. Returns the row count."""
        session = self._session_factory()
        try:
            return repository.delete_session(session, self.session_id)
        finally:
            session.close()

    def purge_stale_sessions(self, max_age: timedelta) -> int:
        """Delete rows of any session untouched for ``max_age``. Returns the row count."""
        session = self._session_factory()
        try:
            removed = repository.purge_stale_sessions(session, utc_now() - max_age)
        finally:
            session.close()
        if removed:
            logger.info("Purged %d stale session storage row(s)", removed)
        return removed


def build_storage(settings: "Settings") -> SessionStorage:
    """Return the storage backend selected by ``settings.storage_backend``."""
    if settings.storage_backend == "file":
        return JsonFileSessionStorage(settings.storage_dir, settings.session_id)
    if settings.storage_backend == "sqlite":
        from gridnav.database.engine import make_session_factory

        return SqlSessionStorage(
            make_session_factory(settings.database_url), settings.session_id
        )
    return MemorySessionStorage()
