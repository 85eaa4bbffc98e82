from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Callable

from ..definition import PresentationDefinition
from .components import FrontPageComponent
from .scheduling import AsyncioRepeatingScheduler, RepeatingScheduler, TypesetRequests
from .session import DEFAULT_REFRESH_SECONDS, RIGHT_KEY_CODE, PresentationSession, normalize_key

logger = logging.getLogger("sd.presentation_service")

PHASE_FRONT_PAGE = "front-page"
PHASE_PRESENTING = "presenting"


class PresentationService:
    """
    Holds the talk on its front page until the speaker presses right,
    then runs a PresentationSession with the clock already ticking.
    """

    def __init__(
        self,
        definition: PresentationDefinition,
        *,
        scheduler: RepeatingScheduler | None = None,
        now: Callable[[], float] = time.perf_counter,
        refresh_seconds: float = DEFAULT_REFRESH_SECONDS,
    ) -> None:
        self.definition = definition
        self.scheduler = scheduler or AsyncioRepeatingScheduler()
        self.now = now
        self.refresh_seconds = refresh_seconds
        self.typesetter = TypesetRequests()
        self.front_page = FrontPageComponent()
        self.front_page.render(definition)
        self.session: PresentationSession | None = None

    @property
    def phase(self) -> str:
        return PHASE_FRONT_PAGE if self.session is None else PHASE_PRESENTING

    @property
    def document_title(self) -> str:
        return self.definition.title

    def start(self) -> PresentationSession:
        if self.session is not None:
            return self.session
        session = PresentationSession(
            self.definition,
            self.scheduler,
            self.typesetter,
            now=self.now,
            refresh_seconds=self.refresh_seconds,
        )
        self.session = session
        session.toggle_timer()
        logger.info("Presentation started: %r (%d slides)", self.definition.title, self.definition.slide_count)
        return session

    def restart(self) -> None:
        if self.session is None:
            return
        self.session.close()
        self.session = None
        self.typesetter.request_typeset()
        logger.info("Presentation returned to front page")

    def handle_key(self, key: Any) -> bool:
        if self.session is not None:
            return self.session.handle_key(key)
        if normalize_key(key) == RIGHT_KEY_CODE:
            self.start()
            return True
        return False

    def state_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "phase": self.phase,
            "title": self.document_title,
            "typesetSeq": self.typesetter.seq,
        }
        if self.session is None:
            payload["revision"] = 0
            payload["html"] = {"frontPage": self.front_page.to_html()}
        else:
            payload.update(self.session.snapshot())
        return payload


async def presentation_sse_events(service: PresentationService, *, min_interval_ms: int = 50):
    """
    Server-Sent Events stream of `state_payload()`.
    Pushes only when the phase, revision or typeset sequence changed since
    the last push, at most once per `min_interval_ms`.
    """
    last: tuple[Any, ...] | None = None
    while True:
        payload = service.state_payload()
        key = (payload["phase"], payload["revision"], payload["typesetSeq"])
        if key != last:
            last = key
            yield f"data: {json.dumps(payload, separators=(',', ':'))}\n\n"
        await asyncio.sleep(max(0.001, min_interval_ms / 1000.0))
