from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from .config import PRESENTATION_DIR
from .definition import Author, PresentationDefinition
from .services.components import front_page_image
from .services.deck_builder import DeckBuilder
from .services.elements import Element, raw_node

logger = logging.getLogger("sd.content_loader")

PRESENTATION_FILE = "presentation.json"


def parse_duration(value: Any) -> float:
    """
    Seconds from a number or an `m:ss` string (`"1:45"` -> 105).
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value or "").strip()
    m = re.match(r"^(\d+):([0-5]\d)$", s)
    if m:
        return float(int(m.group(1)) * 60 + int(m.group(2)))
    try:
        return float(s)
    except ValueError:
        raise ValueError(f"Invalid duration: {value!r}") from None


def _html(value: Any) -> Element:
    return Element("div", {"class": "html-fragment"}, [raw_node(str(value))])


def _apply_step(deck: DeckBuilder, step: Any, where: str) -> None:
    """
    One slide step:
      {"html": "..."}                       standalone slide
      {"items": [...], "clear"?, "diagram"?, "footnotes"?}
    Diagram and footnotes stick until a later step changes them (null clears).
    """
    if isinstance(step, str):
        deck.push_slide(step)
        return
    if not isinstance(step, dict):
        raise ValueError(f"{where}: slide must be an object or an html string")

    if "diagram" in step:
        diagram = step.get("diagram")
        deck.set_diagram(_html(diagram) if diagram else None)
    if "footnotes" in step:
        notes = step.get("footnotes")
        if notes is not None and not isinstance(notes, list):
            raise ValueError(f"{where}: footnotes must be a list")
        deck.set_footnotes([str(n) for n in notes] if notes else None)
    if step.get("clear"):
        deck.clear_items()

    if "html" in step:
        deck.push_slide(str(step.get("html") or ""))
        return

    items = step.get("items")
    if isinstance(items, str):
        deck.push_item(items)
    elif isinstance(items, list) and items:
        deck.push_items([str(i) for i in items])
    else:
        raise ValueError(f"{where}: slide needs `html` or a non-empty `items` list")


def parse_presentation(obj: Any) -> PresentationDefinition:
    if not isinstance(obj, dict):
        raise ValueError(f"{PRESENTATION_FILE} must be an object")

    author_obj = obj.get("author") or {}
    if not isinstance(author_obj, dict):
        raise ValueError("author must be an object with name and email")
    author = Author(name=str(author_obj.get("name", "")), email=str(author_obj.get("email", "")))

    groups = obj.get("timegroups")
    if not isinstance(groups, list) or not groups:
        raise ValueError("timegroups must be a non-empty list")

    deck = DeckBuilder()
    for gi, group in enumerate(groups):
        if not isinstance(group, dict):
            raise ValueError(f"timegroups[{gi}] must be an object")
        slides = group.get("slides") or []
        if not isinstance(slides, list):
            raise ValueError(f"timegroups[{gi}].slides must be a list")
        for si, step in enumerate(slides):
            _apply_step(deck, step, f"timegroups[{gi}].slides[{si}]")
        deck.end_timegroup(parse_duration(group.get("duration")))

    extra: dict[str, Any] = {}
    if obj.get("slidesUrl"):
        extra["slidesUrl"] = str(obj["slidesUrl"])

    return deck.build(
        title=str(obj.get("title", "")),
        author=author,
        occasion=str(obj.get("occasion", "")),
        front_page_image=front_page_image(obj.get("frontPageImage")),
        extra=extra,
    )


def load_presentation(pres_dir: Path | None = None) -> PresentationDefinition:
    pres_dir = pres_dir or PRESENTATION_DIR
    path = pres_dir / PRESENTATION_FILE
    if not path.exists():
        raise FileNotFoundError(f"Missing presentation file: {path}")
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON ({e})") from e
    definition = parse_presentation(obj)
    logger.info(
        "Loaded %r: %d slides in %d timegroups (%.0fs)",
        definition.title,
        definition.slide_count,
        len(definition.timegroups),
        definition.total_duration,
    )
    return definition
