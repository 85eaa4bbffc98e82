from __future__ import annotations

from dataclasses import dataclass

from .services.presentation_service import PresentationService


@dataclass
class AppState:
    # Created on startup from the presentation directory (see main.py).
    service: PresentationService | None = None


STATE = AppState()
