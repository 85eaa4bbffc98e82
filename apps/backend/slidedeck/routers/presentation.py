from __future__ import annotations

import logging

from fastapi import APIRouter, Body
from fastapi.responses import Response, StreamingResponse

from ..config import STREAM_INTERVAL_MS
from ..services.presentation_service import presentation_sse_events
from ..services.session import PresentationSession
from ..state import STATE

logger = logging.getLogger("sd.routers.presentation")

router = APIRouter()


def _not_loaded() -> Response:
    return Response(status_code=503, content="Presentation not loaded", media_type="text/plain")


def _not_started() -> Response:
    return Response(status_code=409, content="Not started", media_type="text/plain")


def _session() -> PresentationSession | Response:
    if STATE.service is None:
        return _not_loaded()
    if STATE.service.session is None:
        return _not_started()
    return STATE.service.session


@router.get("/api/presentation")
def get_presentation():
    if STATE.service is None:
        return _not_loaded()
    return STATE.service.definition.summary_payload()


@router.get("/api/presentation/state")
def presentation_state():
    if STATE.service is None:
        return _not_loaded()
    return STATE.service.state_payload()


@router.get("/api/presentation/stream")
async def presentation_stream():
    if STATE.service is None:
        return _not_loaded()
    return StreamingResponse(
        presentation_sse_events(STATE.service, min_interval_ms=STREAM_INTERVAL_MS),
        media_type="text/event-stream",
    )


# Control endpoints are async so they run on the event loop, where the
# repeating timeline refresh is scheduled.


@router.post("/api/presentation/start")
async def presentation_start():
    if STATE.service is None:
        return _not_loaded()
    STATE.service.start()
    return {"ok": True, "phase": STATE.service.phase}


@router.post("/api/presentation/restart")
async def presentation_restart():
    if STATE.service is None:
        return _not_loaded()
    STATE.service.restart()
    return {"ok": True, "phase": STATE.service.phase}


@router.post("/api/presentation/next")
async def presentation_next():
    session = _session()
    if isinstance(session, Response):
        return session
    return {"ok": True, "index": session.next()}


@router.post("/api/presentation/previous")
async def presentation_previous():
    session = _session()
    if isinstance(session, Response):
        return session
    return {"ok": True, "index": session.previous()}


@router.post("/api/presentation/toggle-timer")
async def presentation_toggle_timer():
    session = _session()
    if isinstance(session, Response):
        return session
    return {"ok": True, "running": session.toggle_timer()}


@router.post("/api/presentation/key")
async def presentation_key(payload: dict = Body(...)):
    """
    Payload: { "keyCode": 39 } or { "key": "ArrowRight" }
    """
    if STATE.service is None:
        return _not_loaded()
    key = payload.get("keyCode", payload.get("key"))
    if key is None or isinstance(key, (dict, list)):
        logger.warning("presentation_key: 400 Missing key (keys=%s)", sorted(payload.keys()))
        return Response(status_code=400, content="Missing keyCode", media_type="text/plain")
    handled = STATE.service.handle_key(key)
    return {"ok": True, "handled": handled, "phase": STATE.service.phase}
