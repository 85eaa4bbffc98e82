from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from ..definition import PresentationDefinition
from .clock import Clock
from .components import HeaderComponent, NavigationState, SlideHostComponent, TimelineComponent, TimelineState
from .navigator import Navigator
from .scheduling import RepeatingScheduler, Typesetter

logger = logging.getLogger("sd.session")

DEFAULT_REFRESH_SECONDS = 0.066

LEFT_KEY_CODE = 37
RIGHT_KEY_CODE = 39
SPACE_KEY_CODE = 32

# DOM `KeyboardEvent.key` values accepted alongside the legacy key codes.
_KEY_NAMES = {
    "ArrowLeft": LEFT_KEY_CODE,
    "ArrowRight": RIGHT_KEY_CODE,
    " ": SPACE_KEY_CODE,
    "Space": SPACE_KEY_CODE,
    "Spacebar": SPACE_KEY_CODE,
}


def normalize_key(key: Any) -> int | None:
    """Key code for a key code or DOM key name; None when unrecognized."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        if key in _KEY_NAMES:
            return _KEY_NAMES[key]
        s = key.strip()
        if s.isdigit():
            return int(s)
    return None


class PresentationSession:
    """
    One running talk: Clock + Navigator + the header, timeline and slide host.

    Every mutation holds `lock`, so handlers on worker threads and the
    repeating timeline refresh never interleave.
    """

    def __init__(
        self,
        definition: PresentationDefinition,
        scheduler: RepeatingScheduler,
        typesetter: Typesetter,
        *,
        now: Callable[[], float] = time.perf_counter,
        refresh_seconds: float = DEFAULT_REFRESH_SECONDS,
    ) -> None:
        self.definition = definition
        self.scheduler = scheduler
        self.typesetter = typesetter
        self.refresh_seconds = refresh_seconds
        self.lock = threading.RLock()

        self.clock = Clock(now)
        self.navigator = Navigator(definition.slide_count)
        self.slide = SlideHostComponent()
        self.header = HeaderComponent(definition.title, definition.author.name, definition.author.email)
        self.timeline = TimelineComponent(definition.timegroups)
        self._timer_handle: Any | None = None
        self.revision = 0

        with self.lock:
            self.slide.render(definition.slide(self.navigator.current_index))
            self.header.render(self._navigation_state())
            self.timeline.render(TimelineState(self.clock.elapsed_seconds(), self.navigator.current_index - 1, False))
            self.revision += 1
        self.typesetter.request_typeset()

    @property
    def timer_active(self) -> bool:
        return self._timer_handle is not None

    def _navigation_state(self) -> NavigationState:
        return NavigationState(index=self.navigator.current_index, high_index=self.definition.slide_count)

    def _refresh_timeline(self, running: bool) -> None:
        self.timeline.render(TimelineState(self.clock.elapsed_seconds(), self.navigator.current_index - 1, running))
        self.revision += 1

    def _show_current(self) -> None:
        # Fixed order: slide host, header, timeline.
        index = self.navigator.current_index
        self.slide.render(self.definition.slide(index))
        self.header.render(self._navigation_state())
        self._refresh_timeline(self.timer_active)

    def next(self) -> int:
        with self.lock:
            index = self.navigator.next()
            self._show_current()
        logger.debug("next -> slide %d/%d", index, self.definition.slide_count)
        self.typesetter.request_typeset()
        return index

    def previous(self) -> int:
        with self.lock:
            index = self.navigator.previous()
            self._show_current()
        logger.debug("previous -> slide %d/%d", index, self.definition.slide_count)
        self.typesetter.request_typeset()
        return index

    def _tick(self) -> None:
        with self.lock:
            if self._timer_handle is None:
                return
            self._refresh_timeline(True)

    def toggle_timer(self) -> bool:
        """Start or pause the clock. Returns True when the clock is now running."""
        with self.lock:
            if self._timer_handle is None:
                self.clock.start()
                self._refresh_timeline(True)
                self._timer_handle = self.scheduler.schedule(self.refresh_seconds, self._tick)
                logger.info("Timer started at %.2fs", self.clock.elapsed_seconds())
                return True

            self._refresh_timeline(False)
            handle, self._timer_handle = self._timer_handle, None
            self.scheduler.cancel(handle)
            self.clock.pause()
            logger.info("Timer paused at %.2fs", self.clock.elapsed_seconds())
            return False

    def handle_key(self, key: Any) -> bool:
        """Dispatch a key press. Returns False for keys with no binding."""
        code = normalize_key(key)
        if code == LEFT_KEY_CODE:
            self.previous()
        elif code == RIGHT_KEY_CODE:
            self.next()
        elif code == SPACE_KEY_CODE:
            self.toggle_timer()
        else:
            return False
        return True

    def close(self) -> None:
        with self.lock:
            if self._timer_handle is not None:
                handle, self._timer_handle = self._timer_handle, None
                self.scheduler.cancel(handle)
                self.clock.pause()

    def snapshot(self) -> dict[str, Any]:
        with self.lock:
            layout = self.timeline.layout
            return {
                "index": self.navigator.current_index,
                "slideCount": self.definition.slide_count,
                "atFirst": self.navigator.at_first,
                "atLast": self.navigator.at_last,
                "elapsedSeconds": self.clock.elapsed_seconds(),
                "running": self.clock.running,
                "revision": self.revision,
                "typesetSeq": getattr(self.typesetter, "seq", None),
                "timeline": {
                    "elapsedFraction": layout.elapsed.width if layout else 0.0,
                    "highlight": (
                        {"x": layout.highlight.x, "width": layout.highlight.width}
                        if layout and layout.highlight
                        else None
                    ),
                },
                "html": {
                    "header": self.header.to_html(),
                    "slide": self.slide.to_html(),
                    "timeline": self.timeline.to_html(),
                },
            }
