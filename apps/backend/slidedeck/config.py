from __future__ import annotations

import logging
import os
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[3]

PRESENTATION_DIR = Path(os.environ.get("PRESENTATION_DIR") or (REPO_ROOT / "presentations" / "default"))
MEDIA_DIR = PRESENTATION_DIR / "media"

# Timeline refresh period while the clock runs.
TIMELINE_REFRESH_MS = int(os.environ.get("TIMELINE_REFRESH_MS") or 66)
# Minimum gap between two pushes on the state stream.
STREAM_INTERVAL_MS = int(os.environ.get("STREAM_INTERVAL_MS") or 50)

LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").upper()

MATHJAX_URL = os.environ.get("MATHJAX_URL") or "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"


DEV_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


def configure_logging() -> None:
    """
    Route the `sd.*` loggers to stderr. Safe to call more than once.
    """
    root = logging.getLogger("sd")
    root.setLevel(LOG_LEVEL)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
