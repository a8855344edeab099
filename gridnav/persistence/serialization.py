"""Serialization boundary between the store and its persisted payload.

Only two things survive a reload: the active state per grid and the
navigation stack. These helpers map exactly those two onto a JSON-ready
dict (and back) and know nothing else about the store.

Both directions are as forgiving as the store itself: a value the store
accepted is written (stringified if JSON can't hold it) and read back
without being rejected, so one odd field never costs the other grids.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from gridnav.exceptions import PayloadError
from gridnav.models.schemas import (
    GridState,
    NavigationSnapshot,
    PersistedPayload,
    lenient_grid_state,
)
from gridnav.utils.logger import get_logger

logger = get_logger(__name__)

ACTIVE_GRID_STATE_KEY = "activeGridState"
NAVIGATION_STACK_KEY = "navigationStack"


def _stringify_unserializable(value: Any) -> str:
    logger.warning(
        "Storing unserializable %s grid state value as text", type(value).__name__
    )
    return str(value)


def dump_payload(
    active_grid_state: Mapping[str, GridState],
    navigation_stack: Sequence[NavigationSnapshot],
) -> Dict[str, Any]:
    """Return the persisted subset of the store as plain JSON-compatible data."""
    payload = PersistedPayload.model_construct(
        active_grid_state=dict(active_grid_state),
        navigation_stack=list(navigation_stack),
    )
    return payload.model_dump(
        mode="json",
        by_alias=True,
        warnings=False,
        fallback=_stringify_unserializable,
    )


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _load_snapshot(data: Any) -> Optional[NavigationSnapshot]:
    try:
        return NavigationSnapshot.model_validate(data)
    except ValidationError:
        pass
    if not isinstance(data, Mapping):
        return None

    grid_id = _first_present(data, "gridId", "grid_id")
    return_path = _first_present(data, "returnPath", "return_path")
    timestamp = data.get("timestamp")
    if not isinstance(grid_id, str) or not isinstance(return_path, str):
        return None
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None

    return NavigationSnapshot.model_construct(
        grid_id=grid_id,
        state=lenient_grid_state(data.get("state") or {}),
        return_path=return_path,
        timestamp=int(timestamp),
    )


def load_payload(
    data: Any,
) -> Tuple[Dict[str, GridState], List[NavigationSnapshot]]:
    """Inverse of :func:`dump_payload`.

    Each grid entry and each snapshot is read on its own. Grid states with
    odd field values are kept as stored; snapshots missing their grid id,
    return path or timestamp are dropped.

    Raises PayloadError only if ``data`` does not have the payload's shape.
    """
    if not isinstance(data, dict):
        raise PayloadError(f"Expected a JSON object, got {type(data).__name__}")
    if ACTIVE_GRID_STATE_KEY not in data and NAVIGATION_STACK_KEY not in data:
        raise PayloadError("Payload has neither activeGridState nor navigationStack")

    raw_active = data.get(ACTIVE_GRID_STATE_KEY)
    raw_stack = data.get(NAVIGATION_STACK_KEY)
    if raw_active is None:
        raw_active = {}
    if raw_stack is None:
        raw_stack = []
    if not isinstance(raw_active, dict):
        raise PayloadError("activeGridState must be an object")
    if not isinstance(raw_stack, list):
        raise PayloadError("navigationStack must be an array")

    active = {
        str(grid_id): lenient_grid_state(raw_state)
        for grid_id, raw_state in raw_active.items()
    }

    stack: List[NavigationSnapshot] = []
    for position, raw_snapshot in enumerate(raw_stack):
        snapshot = _load_snapshot(raw_snapshot)
        if snapshot is None:
            logger.warning("Dropping unreadable navigation snapshot at position %d", position)
            continue
        stack.append(snapshot)
    return active, stack


def encode_payload(
    active_grid_state: Mapping[str, GridState],
    navigation_stack: Sequence[NavigationSnapshot],
) -> str:
    return json.dumps(dump_payload(active_grid_state, navigation_stack))


def decode_payload(raw: str) -> Tuple[Dict[str, GridState], List[NavigationSnapshot]]:
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise PayloadError(f"Persisted payload is not valid JSON: {exc}") from exc
    return load_payload(data)
