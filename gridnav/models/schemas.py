"""Pydantic schemas for grid view state.

Attributes are snake_case in Python and camelCase on the wire, so a persisted
payload reads ``{"activeGridState": {...}, "navigationStack": [...]}`` with
``pageSize``, ``sortModel``, ``gridId`` and friends inside.
"""
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from gridnav.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 25


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SortItem(_WireModel):
    field: str
    sort: Literal["asc", "desc"] = "asc"


class ScrollPosition(_WireModel):
    top: float = 0
    left: float = 0


class GridState(_WireModel):
    """Interaction state of a single grid view.

    Every field has a default, so any subset of fields can be completed into
    a full state.
    """

    filters: Dict[str, Any] = Field(default_factory=dict)
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    sort_model: List[SortItem] = Field(default_factory=list)
    column_visibility: Dict[str, bool] = Field(default_factory=dict)
    column_widths: Dict[str, float] = Field(default_factory=dict)
    scroll_position: ScrollPosition = Field(default_factory=ScrollPosition)
    selected_row_ids: List[Union[str, int]] = Field(default_factory=list)
    has_searched: bool = False


class NavigationSnapshot(_WireModel):
    """A captured GridState plus where "back" should go and when it was taken."""

    model_config = ConfigDict(frozen=True)

    grid_id: str
    state: GridState
    return_path: str
    timestamp: int = Field(description="Capture time, epoch milliseconds")


class PersistedPayload(_WireModel):
    """The only durable artifact: active view state plus navigation history."""

    active_grid_state: Dict[str, GridState] = Field(default_factory=dict)
    navigation_stack: List[NavigationSnapshot] = Field(default_factory=list)


def default_grid_state() -> GridState:
    """Return a fresh canonical default state (never shared between callers)."""
    return GridState()


# Accept both ``page_size`` and ``pageSize`` style keys in partial updates.
_FIELD_NAMES: Dict[str, str] = {}
for _name, _info in GridState.model_fields.items():
    _FIELD_NAMES[_name] = _name
    if _info.alias:
        _FIELD_NAMES[_info.alias] = _name


def resolve_field_name(key: str) -> Optional[str]:
    """Map an attribute name or wire alias to the GridState attribute name."""
    return _FIELD_NAMES.get(key)


def coerce_field(name: str, value: Any) -> Any:
    """Best-effort conversion of ``value`` to the declared type of ``name``.

    Plain dicts become SortItem/ScrollPosition models and so on. A value that
    does not validate is returned unchanged; field semantics are the
    caller's responsibility.
    """
    try:
        return getattr(GridState.model_validate({name: value}), name)
    except ValidationError:
        return value


def normalize_partial(partial: Any) -> Dict[str, Any]:
    """Translate a partial state into GridState attribute names.

    Unknown keys are dropped. Values are coerced where they validate and
    passed through untouched where they don't. Anything that is not a
    mapping counts as an empty update.
    """
    if isinstance(partial, GridState):
        return dict(partial)
    if not isinstance(partial, Mapping):
        logger.debug("Ignoring non-mapping grid state update %r", type(partial).__name__)
        return {}

    updates: Dict[str, Any] = {}
    for key, value in partial.items():
        name = resolve_field_name(key)
        if name is None:
            logger.debug("Ignoring unknown grid state field %r", key)
            continue
        updates[name] = coerce_field(name, value)
    return updates


def lenient_grid_state(data: Any) -> GridState:
    """Build a GridState from stored data without ever rejecting it.

    Well-formed data is validated as usual. Otherwise each field is coerced
    on its own and fields that fail keep their raw value; missing fields
    take the defaults.
    """
    if isinstance(data, GridState):
        return data
    try:
        return GridState.model_validate(data)
    except ValidationError:
        return GridState.model_construct(**normalize_partial(data))
