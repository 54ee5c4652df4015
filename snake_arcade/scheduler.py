"""Repeating tick timer on the asyncio loop."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


class TickScheduler:
    """A single repeating timer task.

    Each tick runs the callback and then awaits ``on_frame`` before the next
    sleep starts, so ticks never overlap. Stopping from inside a tick lets
    that tick finish; the task then exits instead of sleeping again.
    """

    def __init__(self, on_frame: Optional[Callable[[], Awaitable[None]]] = None):
        self.on_frame = on_frame
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None

    def start(self, interval_ms: int, callback: Callable[[], None]):
        self.stop()
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(interval_ms / 1000, callback))

    def stop(self):
        task, self._task = self._task, None
        if task is not None and task is not _current_task():
            task.cancel()

    async def _run(self, interval: float, callback: Callable[[], None]):
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(interval)
            if self._task is not me:
                break
            try:
                callback()
            except Exception:
                logger.exception("Tick callback failed")
            if self.on_frame is not None:
                try:
                    await self.on_frame()
                except Exception:
                    logger.exception("Frame hook failed")
