"""Application shell and session lifecycle.

The hosting application prunes stale history once the store is available
and clears navigation history right before the session ends. Active grid
state is left alone on the way out so it can still be rehydrated.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional

from gridnav.config import Settings, get_settings
from gridnav.persistence.storage import SessionStorage, build_storage
from gridnav.store.store import GridNavigationStore
from gui.services.grid_management import GridManagement, Navigator
from gui.state import AppState
from gui.utils.logging import log


def build_store(
    settings: Optional[Settings] = None,
    storage: Optional[SessionStorage] = None,
) -> GridNavigationStore:
    """Create and initialize a store from settings (load, then prune)."""
    settings = settings or get_settings()
    return GridNavigationStore.create(
        storage=storage if storage is not None else build_storage(settings),
        storage_key=settings.storage_key,
        snapshot_max_age_ms=settings.snapshot_max_age_ms,
    )


@dataclass
class GridNavigationApp:
    """Owns the session's AppState and runs the mount/unload hooks."""

    state: AppState = field(default_factory=AppState)

    def start(self) -> None:
        """Mount hook: drop history left over from an abandoned session."""
        if not self.state.store.initialized:
            self.state.store.initialize()
        else:
            self.state.store.prune_old_snapshots(self.state.store.snapshot_max_age_ms)
        log("Session started", snapshots=self.state.store.navigation_depth, session=self.state.session_id)

    def shutdown(self) -> None:
        """Unload hook: clear navigation history only."""
        self.state.store.teardown()
        log("Session ended; navigation history cleared", session=self.state.session_id)

    def grid(self, grid_id: str, navigator: Navigator) -> GridManagement:
        return GridManagement(self.state.store, grid_id, navigator)


@contextmanager
def open_session(
    settings: Optional[Settings] = None,
    storage: Optional[SessionStorage] = None,
) -> Iterator[AppState]:
    """Yield an AppState for one session; history is cleared on exit."""
    settings = settings or get_settings()
    app = GridNavigationApp(
        state=AppState(
            store=build_store(settings, storage),
            session_id=settings.session_id,
        )
    )
    log("Opened grid navigation session", session=settings.session_id)
    try:
        yield app.state
    finally:
        app.shutdown()
