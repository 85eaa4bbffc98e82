from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import DEV_CORS_ORIGINS, PRESENTATION_DIR, TIMELINE_REFRESH_MS, configure_logging
from .content_loader import load_presentation
from .routers import health, media, page, presentation
from .services.presentation_service import PresentationService
from .services.scheduling import AsyncioRepeatingScheduler
from .state import STATE

configure_logging()
logger = logging.getLogger("sd.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if STATE.service is None:
        definition = load_presentation(PRESENTATION_DIR)
        STATE.service = PresentationService(
            definition,
            scheduler=AsyncioRepeatingScheduler(asyncio.get_running_loop()),
            refresh_seconds=TIMELINE_REFRESH_MS / 1000.0,
        )
        logger.info("Serving %s", PRESENTATION_DIR)
    try:
        yield
    finally:
        if STATE.service is not None:
            STATE.service.restart()


app = FastAPI(title="slidedeck", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=DEV_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(presentation.router)
app.include_router(media.router)
app.include_router(page.router)
