"""
Optimistic updates: apply local actions first, confirm with the server after.

If the confirming thunk is rejected the compensating actions are dispatched
in order, restoring the records that were touched. Records refreshed by a
concurrent fetch in between are overwritten by the rollback.
"""
import logging
from typing import Awaitable, Callable, Sequence

from nirapoth.store.actions import Action
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import ThunkResult

logger = logging.getLogger(__name__)


async def optimistic_update(
    slice_: ResourceSlice,
    apply: Sequence[Action],
    rollback: Sequence[Action],
    commit: Callable[[], Awaitable[ThunkResult]],
) -> ThunkResult:
    for action in apply:
        slice_.dispatch(action)

    result = await commit()

    if not result.ok:
        logger.info("[STORE] %s rejected, rolling back %d action(s)", result.type, len(rollback))
        for action in rollback:
            slice_.dispatch(action)
    return result
