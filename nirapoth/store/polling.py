"""
Periodic refresh of a dashboard slice.

``PollingTask`` owns one asyncio task. Stopping it cancels the task and waits
for the cancellation to land, so once ``stop()`` returns nothing scheduled by
the poller dispatches again. ``poll()`` wraps start/stop in an async context
manager for views with a bounded lifetime.
"""
import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from nirapoth.core.config import settings

logger = logging.getLogger(__name__)

Refresh = Callable[[], Awaitable[Any]]


class PollingTask:
    def __init__(self, refresh: Refresh, interval: Optional[float] = None, immediate: bool = True,
                 name: str = "poll"):
        self.refresh = refresh
        self.interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval
        if self.interval <= 0:
            raise ValueError("Polling interval must be positive")
        self.immediate = immediate
        self.name = name
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "PollingTask":
        if self.running:
            return self
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug("[POLL] %s started, every %.1fs", self.name, self.interval)
        return self

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        logger.debug("[POLL] %s stopped after %d refresh(es)", self.name, self.ticks)

    async def refresh_now(self) -> None:
        await self._tick()

    async def _run(self) -> None:
        if self.immediate:
            await self._tick()
        while True:
            await asyncio.sleep(self.interval)
            await self._tick()

    async def _tick(self) -> None:
        try:
            await self.refresh()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("[POLL] %s refresh failed", self.name)
        else:
            self.ticks += 1


@asynccontextmanager
async def poll(refresh: Refresh, interval: Optional[float] = None, immediate: bool = True,
               name: str = "poll") -> AsyncIterator[PollingTask]:
    task = PollingTask(refresh, interval, immediate=immediate, name=name).start()
    try:
        yield task
    finally:
        await task.stop()
