"""Age-based garbage collection for navigation history."""

from typing import Iterable, List

from gridnav.models.schemas import NavigationSnapshot

# 30 minutes in milliseconds
DEFAULT_SNAPSHOT_MAX_AGE_MS = 30 * 60 * 1000


def prune_snapshots(
    snapshots: Iterable[NavigationSnapshot],
    max_age_ms: int,
    now_ms: int,
) -> List[NavigationSnapshot]:
    """Return the snapshots younger than ``max_age_ms``, in their original order.

    A snapshot exactly ``max_age_ms`` old is dropped.
    """
    return [s for s in snapshots if now_ms - s.timestamp < max_age_ms]
