"""
Async thunks: one remote operation with a pending/fulfilled/rejected lifecycle.

A thunk is declared on a slice class with the ``thunk`` decorator::

    class ReportsSlice(ResourceSlice):
        @thunk("citizenReports/fetchMyReports", "Failed to fetch reports", kind=FETCH)
        async def fetch_my_reports(self, params=None):
            return await self.api.get_my_reports(self.query_params(params))

Calling ``await slice.fetch_my_reports()`` dispatches ``Pending``, awaits the
payload creator and dispatches ``Fulfilled`` or ``Rejected``. The call never
raises for request failures unless ``unwrap=True`` is passed.
"""
import asyncio
import functools
import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from nirapoth.core.errors import NiraPothError, RequestError
from nirapoth.store.actions import FETCH, MUTATION, STATS, Fulfilled, Pending, Rejected

if TYPE_CHECKING:
    from nirapoth.store.slice import ResourceSlice

logger = logging.getLogger(__name__)


@dataclass
class ThunkResult:
    type: str
    ok: bool
    payload: Any = None
    error: Optional[str] = None
    # The response arrived after a newer fetch was issued and was dropped.
    discarded: bool = False


def rejection_message(error: Exception, fallback: str) -> str:
    if isinstance(error, RequestError):
        return error.server_message or fallback
    if isinstance(error, NiraPothError):
        return error.message or fallback
    return fallback


class AsyncThunk:
    def __init__(
        self,
        type_prefix: str,
        payload_creator: Callable[..., Awaitable[Any]],
        fallback_message: str,
        kind: str = MUTATION,
        refetch: bool = False,
        refresh_stats: bool = False,
        stats_key: Optional[str] = None,
        notify: Optional[bool] = None,
    ):
        if kind == STATS and not stats_key:
            raise ValueError(f"{type_prefix}: stats thunks need a stats_key")
        self.type_prefix = type_prefix
        self.payload_creator = payload_creator
        self.fallback_message = fallback_message
        self.kind = kind
        self.refetch = refetch
        self.refresh_stats = refresh_stats
        self.stats_key = stats_key
        # Failed mutations are toasted by default, failed reads only land in state.
        self.notify = kind not in (FETCH, STATS) if notify is None else notify
        functools.update_wrapper(self, payload_creator)

    @property
    def pending(self) -> str:
        return f"{self.type_prefix}/pending"

    @property
    def fulfilled(self) -> str:
        return f"{self.type_prefix}/fulfilled"

    @property
    def rejected(self) -> str:
        return f"{self.type_prefix}/rejected"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return functools.partial(self.run, instance)

    def __repr__(self) -> str:
        return f"<AsyncThunk {self.type_prefix} ({self.kind})>"

    async def run(self, slice_: "ResourceSlice", *args: Any, unwrap: bool = False, **kwargs: Any) -> ThunkResult:
        seq = slice_.next_seq() if self.kind == FETCH else 0
        request_id = uuid.uuid4().hex
        if self.kind == FETCH:
            slice_.remember_fetch(self, args, kwargs)
        if self.kind == STATS:
            slice_.remember_stats(self)

        slice_.dispatch(Pending(type=self.pending, kind=self.kind, seq=seq, request_id=request_id))
        try:
            payload = await self.payload_creator(slice_, *args, **kwargs)
        except asyncio.CancelledError:
            slice_.dispatch(Rejected(type=self.rejected, kind=self.kind, seq=seq, request_id=request_id, aborted=True))
            raise
        except (NiraPothError, ValidationError) as e:
            message = rejection_message(e, self.fallback_message)
            logger.warning("[STORE] %s rejected: %s", self.type_prefix, e)
            slice_.dispatch(Rejected(type=self.rejected, kind=self.kind, seq=seq, request_id=request_id, error=message))
            if unwrap:
                raise
            if self.notify and slice_.feedback is not None:
                if isinstance(e, RequestError):
                    slice_.feedback.request_error(e, message)
                else:
                    slice_.feedback.error(message)
            return ThunkResult(self.type_prefix, ok=False, error=message)
        except Exception:
            logger.exception("[STORE] %s failed unexpectedly", self.type_prefix)
            message = self.fallback_message
            slice_.dispatch(Rejected(type=self.rejected, kind=self.kind, seq=seq, request_id=request_id, error=message))
            if unwrap:
                raise
            if self.notify and slice_.feedback is not None:
                slice_.feedback.error(message)
            return ThunkResult(self.type_prefix, ok=False, error=message)

        slice_.dispatch(
            Fulfilled(
                type=self.fulfilled,
                kind=self.kind,
                seq=seq,
                request_id=request_id,
                payload=payload,
                stats_key=self.stats_key,
            )
        )
        discarded = self.kind == FETCH and slice_.state.latest_seq != seq
        if discarded:
            logger.debug("[STORE] %s #%d superseded by #%d", self.type_prefix, seq, slice_.state.latest_seq)

        if self.refetch:
            await slice_.refresh()
        if self.refresh_stats:
            await slice_.refresh_stats()
        return ThunkResult(self.type_prefix, ok=True, payload=payload, discarded=discarded)


def thunk(
    type_prefix: str,
    fallback_message: str,
    kind: str = MUTATION,
    refetch: bool = False,
    refresh_stats: bool = False,
    stats_key: Optional[str] = None,
    notify: Optional[bool] = None,
) -> Callable[[Callable[..., Awaitable[Any]]], AsyncThunk]:
    def decorator(fn: Callable[..., Awaitable[Any]]) -> AsyncThunk:
        return AsyncThunk(
            type_prefix,
            fn,
            fallback_message,
            kind=kind,
            refetch=refetch,
            refresh_stats=refresh_stats,
            stats_key=stats_key,
            notify=notify,
        )

    return decorator
