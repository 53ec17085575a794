"""
Derived views over slice state.

Selectors are pure and memoised on state identity: since every change
installs a new state object, a selector recomputes only when the slice it
reads has actually changed.
"""
import functools
from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from nirapoth.store.state import ResourceState

_MISSING = object()


def memoize_by_state(fn: Callable[..., Any]) -> Callable[..., Any]:
    last_state: Any = _MISSING
    cache: Dict[tuple, Any] = {}

    @functools.wraps(fn)
    def wrapper(state: ResourceState, *args: Any) -> Any:
        nonlocal last_state
        if state is not last_state:
            last_state = state
            cache.clear()
        if args not in cache:
            cache[args] = fn(state, *args)
        return cache[args]

    return wrapper


def _value(item: Any, field: str) -> Any:
    value = getattr(item, field, None)
    return getattr(value, "value", value)


@memoize_by_state
def select_items(state: ResourceState) -> List[Any]:
    return state.items


@memoize_by_state
def select_total(state: ResourceState) -> int:
    return state.data.total if state.data else 0


@memoize_by_state
def select_total_pages(state: ResourceState) -> int:
    return state.data.total_pages if state.data else 0


@memoize_by_state
def count_by_status(state: ResourceState, field: str = "status") -> Dict[str, int]:
    """Counts over the loaded page only, not the whole collection."""
    return dict(Counter(_value(item, field) for item in select_items(state)))


@memoize_by_state
def sum_amounts(state: ResourceState, field: str = "amount", status: Optional[str] = None) -> float:
    total = 0.0
    for item in select_items(state):
        if status is not None and _value(item, "status") != status:
            continue
        total += float(getattr(item, field, 0) or 0)
    return total


@memoize_by_state
def select_by_status(state: ResourceState, status: str, field: str = "status") -> List[Any]:
    status = getattr(status, "value", status)
    return [item for item in select_items(state) if _value(item, field) == status]


@memoize_by_state
def select_unread(state: ResourceState) -> List[Any]:
    return [item for item in select_items(state) if not getattr(item, "is_read", False)]


def has_active_filters(state: ResourceState) -> bool:
    return any(value not in (None, "") for value in state.filters.values())


def select_is_stale(state: ResourceState) -> bool:
    """Data is on screen but the latest refresh failed."""
    return state.data is not None and state.error is not None


def select_stats(state: ResourceState, key: str) -> Any:
    return state.stats.get(key)
