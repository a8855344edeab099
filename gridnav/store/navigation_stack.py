"""LIFO history of captured grid states."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from gridnav.models.schemas import NavigationSnapshot
from gridnav.store.grid_table import GridStateTable
from gridnav.store.pruner import prune_snapshots
from gridnav.utils.logger import get_logger

logger = get_logger(__name__)


class NavigationStack:
    """A single global stack shared by every grid.

    Push captures an independent copy of a grid's current state; pop writes
    that copy back over whatever the grid holds now.
    """

    def __init__(
        self,
        table: GridStateTable,
        snapshots: Optional[Iterable[NavigationSnapshot]] = None,
    ) -> None:
        self._table = table
        self._snapshots: List[NavigationSnapshot] = list(snapshots or [])

    def push(self, grid_id: str, return_path: str, timestamp: int) -> NavigationSnapshot:
        current = self._table.get(grid_id)
        snapshot = NavigationSnapshot.model_construct(
            grid_id=grid_id,
            state=current.model_copy(deep=True),
            return_path=return_path,
            timestamp=timestamp,
        )
        self._snapshots.append(snapshot)
        logger.debug(
            "Pushed %s -> %s (depth=%d)", grid_id, return_path, len(self._snapshots)
        )
        return snapshot

    def pop(self) -> Optional[NavigationSnapshot]:
        if not self._snapshots:
            return None

        snapshot = self._snapshots.pop()
        # The table gets its own copy so edits to the restored live state
        # never reach the snapshot handed back to the caller.
        self._table.set(snapshot.grid_id, snapshot.state.model_copy(deep=True))
        logger.debug(
            "Popped %s -> %s (depth=%d)",
            snapshot.grid_id,
            snapshot.return_path,
            len(self._snapshots),
        )
        return snapshot

    def clear(self) -> None:
        self._snapshots.clear()

    def prune(self, max_age_ms: int, now_ms: int) -> int:
        """Drop expired snapshots. Returns how many were removed."""
        kept = prune_snapshots(self._snapshots, max_age_ms, now_ms)
        removed = len(self._snapshots) - len(kept)
        self._snapshots = kept
        if removed:
            logger.debug("Pruned %d expired navigation snapshot(s)", removed)
        return removed

    @property
    def last_timestamp(self) -> Optional[int]:
        return max((s.timestamp for s in self._snapshots), default=None)

    def as_list(self) -> List[NavigationSnapshot]:
        return list(self._snapshots)

    def __iter__(self) -> Iterator[NavigationSnapshot]:
        return iter(list(self._snapshots))

    def __len__(self) -> int:
        return len(self._snapshots)
