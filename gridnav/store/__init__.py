"""In-memory view-state table, navigation history, and the store that owns them."""
from .grid_table import GridStateTable
from .navigation_stack import NavigationStack
from .pruner import DEFAULT_SNAPSHOT_MAX_AGE_MS, prune_snapshots
from .store import GridNavigationStore

__all__ = [
    "GridStateTable",
    "NavigationStack",
    "DEFAULT_SNAPSHOT_MAX_AGE_MS",
    "prune_snapshots",
    "GridNavigationStore",
]
