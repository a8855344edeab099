"""Per-grid operations for a data grid screen.

Wraps the store for one grid id and a navigator (anything with ``push(path)``
and ``back()``), so a list view can save its state before drilling into a
detail view and a detail view can send the user back to where they were.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Sequence, Union

from gridnav.models.schemas import GridState, NavigationSnapshot
from gridnav.store.store import GridNavigationStore
from gui.utils.logging import log

# Scroll movements at or below this many pixels on both axes are not recorded.
SCROLL_THRESHOLD = 5


class Navigator(Protocol):
    def push(self, path: str) -> None: ...

    def back(self) -> None: ...


def is_empty_filter_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class GridManagement:
    def __init__(
        self,
        store: GridNavigationStore,
        grid_id: str,
        navigator: Navigator,
    ) -> None:
        self.store = store
        self.grid_id = grid_id
        self.navigator = navigator
        scroll = self.state.scroll_position
        self._last_scroll = (scroll.top, scroll.left)

    @property
    def state(self) -> GridState:
        return self.store.get_grid_state(self.grid_id)

    def update_state(self, updates: Mapping[str, Any]) -> None:
        self.store.update_grid_state(self.grid_id, updates)

    # ------------------------------------------------------------------
    # Filters (any filter change sends the grid back to the first page)
    # ------------------------------------------------------------------

    def update_filter(self, key: str, value: Any) -> None:
        filters: Dict[str, Any] = dict(self.state.filters)
        if is_empty_filter_value(value):
            filters.pop(key, None)
        else:
            filters[key] = value
        self.update_state({"filters": filters, "page": 0})

    def clear_filters(self) -> None:
        self.update_state({"filters": {}, "page": 0})

    def clear_filter(self, key: str) -> None:
        filters = dict(self.state.filters)
        filters.pop(key, None)
        self.update_state({"filters": filters, "page": 0})

    # ------------------------------------------------------------------
    # Paging, sorting, layout, selection
    # ------------------------------------------------------------------

    def set_page(self, page: int) -> None:
        self.update_state({"page": page})

    def set_page_size(self, page_size: int) -> None:
        self.update_state({"page_size": page_size, "page": 0})

    def set_sort_model(self, sort_model: Sequence[Mapping[str, str]]) -> None:
        self.update_state({"sort_model": list(sort_model)})

    def set_column_visibility(self, column_visibility: Mapping[str, bool]) -> None:
        self.update_state({"column_visibility": dict(column_visibility)})

    def set_selected_rows(self, row_ids: Iterable[Union[str, int]]) -> None:
        self.update_state({"selected_row_ids": list(row_ids)})

    def record_scroll(self, top: float, left: float) -> bool:
        """Store the scroll offsets if they moved noticeably. Returns True if stored."""
        last_top, last_left = self._last_scroll
        if abs(top - last_top) <= SCROLL_THRESHOLD and abs(left - last_left) <= SCROLL_THRESHOLD:
            return False
        self._last_scroll = (top, left)
        self.update_state({"scroll_position": {"top": top, "left": left}})
        return True

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def navigate_to(
        self,
        path: str,
        current_path: str,
        scroll_position: Optional[Mapping[str, float]] = None,
    ) -> None:
        """Save this grid's state and go to ``path``; "back" returns to ``current_path``."""
        if scroll_position is not None:
            self.update_state({"scroll_position": dict(scroll_position)})
        self.store.push_navigation(self.grid_id, current_path)
        self.navigator.push(path)

    def return_to_grid(self) -> Optional[NavigationSnapshot]:
        snapshot = self.store.pop_navigation()
        if snapshot is not None:
            self.navigator.push(snapshot.return_path)
        else:
            log("No navigation history; going back", grid=self.grid_id)
            self.navigator.back()
        return snapshot
