from __future__ import annotations

from fastapi import APIRouter

from ..state import STATE

router = APIRouter()


@router.get("/api/health")
def health():
    service = STATE.service
    return {
        "ok": service is not None,
        "started": bool(service is not None and service.session is not None),
    }
