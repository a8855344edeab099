"""Mapping from grid id to its current GridState."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional

from gridnav.models.schemas import GridState, default_grid_state, normalize_partial


class GridStateTable:
    """Current state per grid view.

    Entries are only ever overwritten, never deleted.
    """

    def __init__(self, entries: Optional[Mapping[str, GridState]] = None) -> None:
        self._entries: Dict[str, GridState] = dict(entries or {})

    def get(self, grid_id: str) -> GridState:
        """Return the stored state, or a fresh default if the grid is unknown."""
        state = self._entries.get(grid_id)
        return state if state is not None else default_grid_state()

    def update(self, grid_id: str, partial: Mapping[str, Any]) -> GridState:
        """Merge ``partial`` over the existing state (which is itself laid over
        the defaults) and store the result.

        Fields missing from ``partial`` keep their existing value.
        """
        merged: Dict[str, Any] = dict(default_grid_state())
        existing = self._entries.get(grid_id)
        if existing is not None:
            merged.update(dict(existing))
        merged.update(normalize_partial(partial))

        state = GridState.model_construct(**merged)
        self._entries[grid_id] = state
        return state

    def set(self, grid_id: str, state: GridState) -> None:
        """Replace whatever was stored with ``state``.

        A GridState is stored as is. A plain mapping is turned into one
        without validation and without looking at the previous entry.
        """
        if not isinstance(state, GridState):
            state = GridState.model_construct(**normalize_partial(state))
        self._entries[grid_id] = state

    def as_dict(self) -> Dict[str, GridState]:
        return dict(self._entries)

    def __contains__(self, grid_id: object) -> bool:
        return grid_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
