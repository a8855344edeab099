"""
gridnav - View-state cache with navigation history

Remembers the interaction state of each grid view and keeps a LIFO history
of captured states so a user can drill into a detail view and come back to
exactly where they left off.
"""

__version__ = "1.0.0"

from .models.schemas import GridState, NavigationSnapshot, ScrollPosition, SortItem
from .store.store import GridNavigationStore

__all__ = [
    "GridState",
    "NavigationSnapshot",
    "ScrollPosition",
    "SortItem",
    "GridNavigationStore",
]
