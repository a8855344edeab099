"""Composition root: owns the state table and navigation stack.

Construct one store per application session and hand it to the views that
need it (see ``gui.state.AppState``). The usual lifecycle is::

    store = GridNavigationStore.create(storage=storage)   # load, then prune
    ...
    store.teardown()                                      # history only

Every mutating call persists the whole payload immediately afterwards.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from gridnav.models.schemas import GridState, NavigationSnapshot
from gridnav.persistence.adapter import DEFAULT_STORAGE_KEY, PersistenceAdapter
from gridnav.persistence.storage import SessionStorage
from gridnav.store.grid_table import GridStateTable
from gridnav.store.navigation_stack import NavigationStack
from gridnav.store.pruner import DEFAULT_SNAPSHOT_MAX_AGE_MS
from gridnav.utils.logger import get_logger

logger = get_logger(__name__)


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class GridNavigationStore:
    def __init__(
        self,
        storage: Optional[SessionStorage] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Optional[Callable[[], int]] = None,
        snapshot_max_age_ms: int = DEFAULT_SNAPSHOT_MAX_AGE_MS,
    ) -> None:
        self._persistence = (
            PersistenceAdapter(storage, storage_key) if storage is not None else None
        )
        self._clock = clock or wall_clock_ms
        self.snapshot_max_age_ms = snapshot_max_age_ms

        self._table = GridStateTable()
        self._stack = NavigationStack(self._table)
        self._last_push_ms: Optional[int] = None
        self.initialized = False

    @classmethod
    def create(cls, **kwargs: Any) -> "GridNavigationStore":
        """Build a store and run :meth:`initialize` on it."""
        store = cls(**kwargs)
        store.initialize()
        return store

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Rehydrate from storage (or start empty), then drop stale history."""
        if self._persistence is not None:
            active, snapshots = self._persistence.load()
            self._table = GridStateTable(active)
            self._stack = NavigationStack(self._table, snapshots)
            self._last_push_ms = self._stack.last_timestamp
        self.initialized = True
        self.prune_old_snapshots(self.snapshot_max_age_ms)

    def teardown(self) -> None:
        """Session is ending: discard navigation history, keep view state."""
        self.clear_navigation_stack()

    # ------------------------------------------------------------------
    # Grid state
    # ------------------------------------------------------------------

    def get_grid_state(self, grid_id: str) -> GridState:
        return self._table.get(grid_id)

    def update_grid_state(self, grid_id: str, updates: Mapping[str, Any]) -> None:
        self._table.update(grid_id, updates)
        self._persist()

    def set_grid_state(self, grid_id: str, state: GridState) -> None:
        self._table.set(grid_id, state)
        self._persist()

    # ------------------------------------------------------------------
    # Navigation history
    # ------------------------------------------------------------------

    def push_navigation(self, grid_id: str, return_path: str) -> None:
        self._stack.push(grid_id, return_path, self._next_timestamp())
        self._persist()

    def pop_navigation(self) -> Optional[NavigationSnapshot]:
        snapshot = self._stack.pop()
        if snapshot is None:
            return None
        self._persist()
        return snapshot

    def clear_navigation_stack(self) -> None:
        self._stack.clear()
        self._persist()

    def prune_old_snapshots(self, max_age_ms: int = DEFAULT_SNAPSHOT_MAX_AGE_MS) -> None:
        self._stack.prune(max_age_ms, self._clock())
        self._persist()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def active_grid_state(self) -> Dict[str, GridState]:
        return self._table.as_dict()

    @property
    def navigation_stack(self) -> Tuple[NavigationSnapshot, ...]:
        return tuple(self._stack)

    @property
    def navigation_depth(self) -> int:
        return len(self._stack)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _next_timestamp(self) -> int:
        now = self._clock()
        if self._last_push_ms is not None and now < self._last_push_ms:
            logger.debug("Clock went backwards by %d ms", self._last_push_ms - now)
            now = self._last_push_ms
        self._last_push_ms = now
        return now

    def _persist(self) -> None:
        if self._persistence is None:
            return
        self._persistence.save(self._table.as_dict(), self._stack.as_list())
