"""Actions reduced by every resource slice."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Thunk kinds: what a fulfilled thunk does to the slice state.
FETCH = "fetch"        # replace the current page, fenced by sequence number
DETAIL = "detail"      # set ``current`` and patch the list copy in place
PATCH = "patch"        # replace one record in place by id
REMOVE = "remove"      # drop one record after a confirmed DELETE
STATS = "stats"        # store an aggregate under ``stats[key]``
MUTATION = "mutation"  # no local change; callers refetch

# Kinds that write to the server and count towards ``submitting``.
WRITE_KINDS = (MUTATION, PATCH, REMOVE)


class Action(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class SetFilters(Action):
    filters: Dict[str, Any] = Field(default_factory=dict)


class ClearFilters(Action):
    pass


class SetPagination(Action):
    page: Optional[int] = None
    limit: Optional[int] = None


class ClearError(Action):
    pass


class Pending(Action):
    type: str
    kind: str
    request_id: str = ""
    seq: int = 0


class Fulfilled(Action):
    type: str
    kind: str
    request_id: str = ""
    seq: int = 0
    payload: Any = None
    stats_key: Optional[str] = None


class Rejected(Action):
    type: str
    kind: str
    request_id: str = ""
    seq: int = 0
    error: Optional[str] = None
    aborted: bool = False


class PatchItem(Action):
    item: Any


class RemoveItem(Action):
    item_id: str


class StatsLoaded(Action):
    key: str
    stats: Any
