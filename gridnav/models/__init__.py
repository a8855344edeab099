"""Data schemas for grid view state and navigation history."""
from .schemas import (
    GridState,
    NavigationSnapshot,
    PersistedPayload,
    ScrollPosition,
    SortItem,
    default_grid_state,
)

__all__ = [
    "GridState",
    "NavigationSnapshot",
    "PersistedPayload",
    "ScrollPosition",
    "SortItem",
    "default_grid_state",
]
