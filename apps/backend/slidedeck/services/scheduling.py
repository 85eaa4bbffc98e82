from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger("sd.scheduling")


class RepeatingScheduler(Protocol):
    def schedule(self, period_seconds: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class AsyncioRepeatingScheduler:
    """
    Runs a callback every `period_seconds` as a task on the server event loop.

    `schedule` must be called from the loop thread (async route handlers are).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, period_seconds: float, callback: Callable[[], None]) -> asyncio.Task:
        loop = self._loop or asyncio.get_running_loop()
        return loop.create_task(self._repeat(period_seconds, callback))

    def cancel(self, handle: asyncio.Task) -> None:
        handle.cancel()

    @staticmethod
    async def _repeat(period_seconds: float, callback: Callable[[], None]) -> None:
        while True:
            await asyncio.sleep(max(0.001, period_seconds))
            try:
                callback()
            except Exception:
                logger.exception("Repeating timeline refresh failed")
                raise


class Typesetter(Protocol):
    def request_typeset(self) -> None: ...


class TypesetRequests:
    """
    Math typesetting runs in the browser (MathJax). Each request bumps `seq`;
    the page calls `MathJax.typesetPromise()` whenever it sees a new value.
    """

    def __init__(self) -> None:
        self.seq = 0

    def request_typeset(self) -> None:
        self.seq += 1
