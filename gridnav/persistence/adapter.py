"""Load and save the store's persisted payload, best-effort.

Neither direction ever raises to the store: a failed or malformed read
yields an empty table and stack, a failed write is logged and dropped.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from gridnav.models.schemas import GridState, NavigationSnapshot
from gridnav.persistence.serialization import decode_payload, encode_payload
from gridnav.persistence.storage import SessionStorage
from gridnav.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "grid-navigation-storage"


class PersistenceAdapter:
    def __init__(
        self,
        storage: SessionStorage,
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> Tuple[Dict[str, GridState], List[NavigationSnapshot]]:
        raw: Optional[str]
        try:
            raw = self.storage.get_item(self.key)
        except Exception as exc:
            logger.warning("Could not read persisted grid state: %s", exc)
            return {}, []

        if raw is None:
            return {}, []

        try:
            active, stack = decode_payload(raw)
        except Exception as exc:
            logger.warning("Ignoring malformed persisted grid state: %s", exc)
            return {}, []

        logger.debug(
            "Rehydrated %d grid state(s) and %d snapshot(s)", len(active), len(stack)
        )
        return active, stack

    def save(
        self,
        active_grid_state: Mapping[str, GridState],
        navigation_stack: Sequence[NavigationSnapshot],
    ) -> bool:
        """Write the payload. Returns False if it could not be written."""
        try:
            self.storage.set_item(self.key, encode_payload(active_grid_state, navigation_stack))
        except Exception as exc:
            logger.warning("Could not persist grid state: %s", exc)
            return False
        return True
