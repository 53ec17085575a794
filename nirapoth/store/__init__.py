from nirapoth.store.polling import PollingTask, poll
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.state import ResourceState
from nirapoth.store.store import Store
from nirapoth.store.thunk import AsyncThunk, ThunkResult, thunk

__all__ = [
    "AsyncThunk",
    "PollingTask",
    "ResourceSlice",
    "ResourceState",
    "Store",
    "ThunkResult",
    "poll",
    "thunk",
]
