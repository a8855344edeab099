"""Application state container.

This is a small, import-safe state object passed to every view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from gridnav.store.store import GridNavigationStore


@dataclass
class AppState:
    """Holds the session's store and the id of the session it belongs to."""

    store: GridNavigationStore = field(default_factory=GridNavigationStore)
    session_id: Optional[str] = None
