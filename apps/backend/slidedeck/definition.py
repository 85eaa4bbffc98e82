from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .services.elements import Element
from .services.timeline import Timegroup, total_duration, validate_timegroups


@dataclass(frozen=True)
class Author:
    name: str
    email: str


@dataclass(frozen=True)
class PresentationDefinition:
    """
    Everything the engine needs to run one talk.

    Slides are already-built content elements; the engine only hosts them.
    """

    title: str
    author: Author
    occasion: str
    slides: tuple[Element, ...]
    timegroups: tuple[Timegroup, ...]
    front_page_image: Element | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.slides:
            raise ValueError("Presentation has no slides")
        validate_timegroups(self.timegroups, len(self.slides))

    @property
    def slide_count(self) -> int:
        return len(self.slides)

    @property
    def total_duration(self) -> float:
        return total_duration(self.timegroups)

    def slide(self, index: int) -> Element:
        """Content of slide `index` (1-based)."""
        if not 1 <= index <= len(self.slides):
            raise IndexError(f"Slide index {index} out of range 1..{len(self.slides)}")
        return self.slides[index - 1]

    def summary_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author": {"name": self.author.name, "email": self.author.email},
            "occasion": self.occasion,
            "slideCount": self.slide_count,
            "totalDuration": self.total_duration,
            "timegroups": [g.to_payload() for g in self.timegroups],
            **self.extra,
        }
