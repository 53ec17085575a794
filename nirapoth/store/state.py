"""
Slice state and the pure reducer shared by every resource family.

The reducer never raises and never mutates: every branch returns either the
same state object (no change) or a copy.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from nirapoth.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from nirapoth.schemas.common import ResourceList
from nirapoth.store.actions import (
    DETAIL,
    FETCH,
    PATCH,
    REMOVE,
    STATS,
    WRITE_KINDS,
    Action,
    ClearError,
    ClearFilters,
    Fulfilled,
    PatchItem,
    Pending,
    Rejected,
    RemoveItem,
    SetFilters,
    SetPagination,
    StatsLoaded,
)


class ResourceState(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    data: Optional[ResourceList] = None
    loading: bool = False
    error: Optional[str] = None

    filters: Dict[str, Any] = Field(default_factory=dict)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    # Sequence number of the latest issued list fetch; older responses are dropped.
    latest_seq: int = 0

    pending_actions: int = 0
    action_error: Optional[str] = None
    current: Any = None
    stats: Dict[str, Any] = Field(default_factory=dict)

    @property
    def submitting(self) -> bool:
        return self.pending_actions > 0

    @property
    def items(self) -> list:
        return list(self.data.items) if self.data else []


def merge_filters(current: Dict[str, Any], partial: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge; ``None`` or empty-string values remove the key."""
    merged = dict(current)
    for key, value in partial.items():
        if value is None or value == "":
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def _patch(state: ResourceState, item: Any) -> Dict[str, Any]:
    update: Dict[str, Any] = {}
    item_id = getattr(item, "id", None)
    if item_id is None:
        return update
    if state.data is not None and state.data.find(item_id) is not None:
        update["data"] = state.data.replace_item(item)
    if state.current is not None and getattr(state.current, "id", None) == item_id:
        update["current"] = item
    return update


def _settle_action(state: ResourceState, error: Optional[str]) -> Dict[str, Any]:
    return {"pending_actions": max(0, state.pending_actions - 1), "action_error": error}


def reduce_resource(state: ResourceState, action: Action) -> ResourceState:
    if isinstance(action, SetFilters):
        filters = merge_filters(state.filters, action.filters)
        if filters == state.filters:
            return state
        return state.model_copy(update={"filters": filters, "page": DEFAULT_PAGE})

    if isinstance(action, ClearFilters):
        return state.model_copy(update={"filters": {}, "page": DEFAULT_PAGE})

    if isinstance(action, SetPagination):
        update: Dict[str, Any] = {}
        if action.page is not None:
            update["page"] = max(DEFAULT_PAGE, action.page)
        if action.limit is not None:
            update["limit"] = max(1, action.limit)
            update.setdefault("page", DEFAULT_PAGE)
        return state.model_copy(update=update) if update else state

    if isinstance(action, ClearError):
        return state.model_copy(update={"error": None, "action_error": None})

    if isinstance(action, PatchItem):
        update = _patch(state, action.item)
        return state.model_copy(update=update) if update else state

    if isinstance(action, RemoveItem):
        if state.data is None:
            return state
        return state.model_copy(update={"data": state.data.without(action.item_id)})

    if isinstance(action, StatsLoaded):
        return state.model_copy(update={"stats": {**state.stats, action.key: action.stats}})

    if isinstance(action, Pending):
        if action.kind == FETCH:
            return state.model_copy(update={"loading": True, "latest_seq": action.seq})
        if action.kind not in WRITE_KINDS:
            return state
        return state.model_copy(update={"pending_actions": state.pending_actions + 1})

    if isinstance(action, Fulfilled):
        if action.kind == FETCH:
            if action.seq != state.latest_seq:
                return state
            return state.model_copy(update={"data": action.payload, "loading": False, "error": None})

        update = _settle_action(state, None) if action.kind in WRITE_KINDS else {}
        if action.kind == DETAIL:
            update.update(_patch(state, action.payload))
            update["current"] = action.payload
        elif action.kind == PATCH:
            update.update(_patch(state, action.payload))
        elif action.kind == REMOVE and state.data is not None:
            update["data"] = state.data.without(action.payload)
        elif action.kind == STATS and action.stats_key:
            update["stats"] = {**state.stats, action.stats_key: action.payload}
        return state.model_copy(update=update)

    if isinstance(action, Rejected):
        if action.kind == FETCH:
            if action.seq != state.latest_seq:
                return state
            if action.aborted:
                return state.model_copy(update={"loading": False})
            return state.model_copy(update={"loading": False, "error": action.error})
        if action.kind not in WRITE_KINDS:
            return state
        if action.aborted:
            return state.model_copy(update=_settle_action(state, state.action_error))
        return state.model_copy(update=_settle_action(state, action.error))

    return state
