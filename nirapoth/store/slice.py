import itertools
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from nirapoth.core.config import settings
from nirapoth.core.feedback import FeedbackChannel
from nirapoth.store.actions import Action, ClearError, ClearFilters, SetFilters, SetPagination
from nirapoth.store.state import ResourceState, reduce_resource
from nirapoth.store.thunk import AsyncThunk, ThunkResult

logger = logging.getLogger(__name__)

Listener = Callable[[ResourceState, Action], None]


class ResourceSlice:
    """
    Holds one resource family's state and applies actions through ``reduce``.

    State objects are immutable; every dispatch that changes something
    installs a new object, so identity comparison is enough to detect change.
    Subclasses declare their remote operations with ``@thunk``.
    """

    name = "resource"
    state_class = ResourceState

    def __init__(self, api: Any = None, feedback: Optional[FeedbackChannel] = None, limit: Optional[int] = None):
        self.api = api
        self.feedback = feedback
        self.state = self.state_class(limit=limit or settings.DEFAULT_PAGE_LIMIT)
        self._seq = itertools.count(1)
        self._listeners: List[Listener] = []
        self._last_fetch: Optional[Tuple[AsyncThunk, tuple, dict]] = None
        self._stats_thunks: Dict[str, AsyncThunk] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    # Reducer plumbing

    def reduce(self, state: ResourceState, action: Action) -> ResourceState:
        return reduce_resource(state, action)

    def dispatch(self, action: Action) -> ResourceState:
        previous = self.state
        self.state = self.reduce(previous, action)
        if self.state is not previous:
            for listener in list(self._listeners):
                listener(self.state, action)
        return self.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def next_seq(self) -> int:
        return next(self._seq)

    # Synchronous reducers

    def set_filters(self, filters: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> ResourceState:
        return self.dispatch(SetFilters(filters={**(filters or {}), **kwargs}))

    def clear_filters(self) -> ResourceState:
        return self.dispatch(ClearFilters())

    def set_pagination(self, page: Optional[int] = None, limit: Optional[int] = None) -> ResourceState:
        return self.dispatch(SetPagination(page=page, limit=limit))

    def clear_error(self) -> ResourceState:
        return self.dispatch(ClearError())

    def query_params(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Current filters and page, overridden by explicit ``params``."""
        query: Dict[str, Any] = {**self.state.filters, "page": self.state.page, "limit": self.state.limit}
        query.update(params or {})
        return query

    # Reconciliation

    @property
    def has_fetched(self) -> bool:
        return self._last_fetch is not None

    def remember_fetch(self, fetch: AsyncThunk, args: tuple, kwargs: dict) -> None:
        self._last_fetch = (fetch, args, kwargs)

    def remember_stats(self, stats: AsyncThunk) -> None:
        self._stats_thunks[stats.stats_key] = stats

    async def refresh(self) -> Optional[ThunkResult]:
        """Re-run the most recent list fetch against the current filters and page."""
        if self._last_fetch is None:
            return None
        fetch, args, kwargs = self._last_fetch
        return await fetch.run(self, *args, **kwargs)

    async def refresh_stats(self) -> List[ThunkResult]:
        """Re-run every stats fetch this slice has issued so far."""
        results = []
        for stats in list(self._stats_thunks.values()):
            results.append(await stats.run(self))
        return results
