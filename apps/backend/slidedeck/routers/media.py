from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import FileResponse, Response

from ..config import MEDIA_DIR

router = APIRouter()


@router.get("/media/{media_path:path}")
def media(media_path: str):
    # Images referenced by slides and the front page.
    p = (MEDIA_DIR / media_path).resolve()
    if not str(p).startswith(str(MEDIA_DIR.resolve())):
        return Response(status_code=400)
    if not p.exists() or not p.is_file():
        return Response(status_code=404)
    return FileResponse(p, headers={"Cache-Control": "public, max-age=60, must-revalidate"})
