from __future__ import annotations

import time
from typing import Callable


class Clock:
    """
    Elapsed presentation time with pause/resume.

    Exactly one of running (`start_timestamp` set) or paused (`start_timestamp`
    is None) holds. `now` must be monotonic and return fractional seconds.
    """

    def __init__(self, now: Callable[[], float] = time.perf_counter) -> None:
        self._now = now
        self.start_timestamp: float | None = None
        self.accumulated_seconds: float = 0.0

    @property
    def running(self) -> bool:
        return self.start_timestamp is not None

    def start(self) -> None:
        if self.start_timestamp is not None:
            return
        self.start_timestamp = self._now()

    def pause(self) -> None:
        if self.start_timestamp is None:
            return
        self.accumulated_seconds += self._now() - self.start_timestamp
        self.start_timestamp = None

    def elapsed_seconds(self) -> float:
        if self.start_timestamp is None:
            return self.accumulated_seconds
        return self.accumulated_seconds + (self._now() - self.start_timestamp)
