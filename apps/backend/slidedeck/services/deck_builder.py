from __future__ import annotations

from typing import Any, Callable, Sequence, Union

from ..definition import Author, PresentationDefinition
from .elements import Element, Raw, raw_node, text_node
from .timeline import Timegroup

# A slide item: plain text (may hold TeX for MathJax), an element, or a
# factory so every slide gets its own copy of the element.
Item = Union[str, Element, Callable[[], Element]]


def _item_node(item: Item) -> Element | str:
    if isinstance(item, (Element, Raw)):
        return item
    if isinstance(item, str):
        return text_node(item)
    return item()


def list_slide(
    items: Sequence[Item],
    hot_count: int,
    diagram: Element | None = None,
    footnotes: Sequence[Item] | None = None,
) -> Element:
    """
    Bullet list where the last `hot_count` items are new on this slide;
    earlier ones are dimmed. Optional diagram to the right and numbered
    footnotes below.
    """
    slide = Element("div", {"class": "list-diagram-slide"})
    ul = Element("ul", {"class": "slide-items"})
    cold = len(items) - hot_count
    for i, item in enumerate(items):
        li = Element("li", {"class": "item-cold" if i < cold else "item-hot"})
        li.append(_item_node(item))
        ul.append(li)
    slide.append(ul)

    if diagram is not None:
        slide.append(Element("div", {"class": "slide-diagram"}, [diagram]))

    if footnotes:
        notes = Element("ol", {"class": "footnotes"})
        for note in footnotes:
            notes.append(Element("li", children=[_item_node(note)]))
        slide.append(notes)
    return slide


class DeckBuilder:
    """
    Builds a talk incrementally, one revealed bullet (or batch) per slide.

        deck = DeckBuilder()
        deck.push_item("Hello")
        deck.push_items(["a", "b"])    # one slide showing Hello, a, b
        deck.end_timegroup(40)          # both slides share 40 seconds
    """

    def __init__(self) -> None:
        self.slides: list[Element] = []
        self.timegroups: list[Timegroup] = []
        self.items: list[Item] = []
        self.diagram: Callable[[], Element | None] = lambda: None
        self.footnotes: Callable[[], Sequence[Item] | None] = lambda: None
        self._group_start = 0.0
        self._group_start_slide = 0

    def set_diagram(self, diagram: Element | Callable[[], Element | None] | None) -> None:
        if diagram is None:
            self.diagram = lambda: None
        elif isinstance(diagram, Element):
            self.diagram = lambda: diagram
        else:
            self.diagram = diagram

    def set_footnotes(self, footnotes: Sequence[Item] | Callable[[], Sequence[Item] | None] | None) -> None:
        if footnotes is None:
            self.footnotes = lambda: None
        elif callable(footnotes):
            self.footnotes = footnotes
        else:
            notes = list(footnotes)
            self.footnotes = lambda: notes

    def _emit(self, hot_count: int) -> None:
        self.slides.append(list_slide(list(self.items), hot_count, self.diagram(), self.footnotes()))

    def push_item(self, item: Item) -> None:
        self.items.append(item)
        self._emit(1)

    def push_items(self, items: Sequence[Item]) -> None:
        self.items.extend(items)
        self._emit(len(items))

    def push_slide(self, content: Element | str) -> None:
        """Add a slide that is not part of the bullet sequence."""
        if isinstance(content, str):
            content = Element("div", {"class": "html-slide"}, [raw_node(content)])
        self.slides.append(content)

    def clear_items(self) -> None:
        self.items = []

    def end_timegroup(self, duration: float) -> Timegroup:
        """Close a timegroup with every slide added since the previous one."""
        group = Timegroup(
            start=self._group_start,
            duration=float(duration),
            start_slide_index=self._group_start_slide,
            slide_count=len(self.slides) - self._group_start_slide,
        )
        self.timegroups.append(group)
        self._group_start += float(duration)
        self._group_start_slide = len(self.slides)
        return group

    def build(
        self,
        *,
        title: str,
        author: Author,
        occasion: str = "",
        front_page_image: Element | None = None,
        extra: dict[str, Any] | None = None,
    ) -> PresentationDefinition:
        if len(self.slides) != self._group_start_slide:
            raise ValueError(f"{len(self.slides) - self._group_start_slide} slide(s) after the last end_timegroup()")
        return PresentationDefinition(
            title=title,
            author=author,
            occasion=occasion,
            slides=tuple(self.slides),
            timegroups=tuple(self.timegroups),
            front_page_image=front_page_image,
            extra=dict(extra or {}),
        )
