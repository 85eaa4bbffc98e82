from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Sequence

from .elements import (
    Element,
    image_node,
    left_arrow_node,
    link_node,
    percent,
    rgb,
    right_arrow_node,
    svg_element,
    text_node,
    wrap_node,
)
from .timeline import (
    HIGHLIGHT_COLOR,
    Timegroup,
    TimelineLayout,
    format_duration,
    layout_timeline,
    total_duration,
    validate_timegroups,
)

if TYPE_CHECKING:
    from ..definition import PresentationDefinition


class ComponentKind(str, enum.Enum):
    HEADER = "header"
    NAVIGATION = "navigation"
    SLIDE_HOST = "slide"
    TIMELINE = "timeline"
    FRONT_PAGE = "front-page"


@dataclass(frozen=True)
class NavigationState:
    index: int
    high_index: int


@dataclass(frozen=True)
class TimelineState:
    elapsed_seconds: float
    highlighted_index: int
    running: bool


class VisualComponent:
    """
    One owned element plus `render(state)`.

    The element is created once in the constructor and only this component
    mutates it. Parents call `render` on children, never touch their elements.
    """

    kind: ComponentKind

    def __init__(self, element: Element) -> None:
        self._element = element
        self.revision = 0

    @property
    def element(self) -> Element:
        return self._element

    @property
    def commands(self) -> dict[str, Callable[[Any], None]]:
        return {"set": self.render}

    def render(self, state: Any) -> None:
        self._render(state)
        self.revision += 1

    def _render(self, state: Any) -> None:
        raise NotImplementedError

    def to_html(self) -> str:
        return self._element.to_html()


class NavigationComponent(VisualComponent):
    kind = ComponentKind.NAVIGATION

    def __init__(self, requests: dict[str, str] | None = None) -> None:
        super().__init__(Element("div", {"id": "navigation"}))
        requests = requests or {"previous": "previous", "next": "next"}

        left_arrow = left_arrow_node()
        right_arrow = right_arrow_node()
        # The page script posts `data-request` to the matching endpoint on click.
        left_arrow.set("data-request", requests["previous"])
        right_arrow.set("data-request", requests["next"])

        self._index_text = wrap_node("navigation-index", text_node(""))
        self._index_text.set("style", "width: 40px; text-align:right")
        self._high_index_text = wrap_node("navigation-index-high", text_node(""))
        for node in (
            self._index_text,
            wrap_node("navigation-left", left_arrow),
            wrap_node("navigation-right", right_arrow),
            self._high_index_text,
        ):
            node.set("class", "navigation-item")
            self._element.append(node)

    def _render(self, state: NavigationState) -> None:
        self._index_text.set_text(state.index)
        self._high_index_text.set_text(state.high_index)


class HeaderComponent(VisualComponent):
    kind = ComponentKind.HEADER

    def __init__(self, title: str, author_name: str, author_email: str, requests: dict[str, str] | None = None) -> None:
        super().__init__(Element("div", {"id": "header"}))
        self.navigation = NavigationComponent(requests)

        author = Element("div", {"id": "author"})
        author.append(wrap_node("author-name", text_node(author_name)))
        author.append(wrap_node("author-email", link_node(f"mailto:{author_email}", author_email)))

        self._element.append(self.navigation.element)
        self._element.append(wrap_node("header-title", text_node(title)))
        self._element.append(wrap_node("author-container", author))

    def _render(self, state: NavigationState) -> None:
        self.navigation.render(state)


class SlideHostComponent(VisualComponent):
    kind = ComponentKind.SLIDE_HOST

    def __init__(self) -> None:
        super().__init__(Element("div", {"id": "slide"}))

    def _render(self, content: Element) -> None:
        self._element.clear()
        self._element.append(content)


class TimelineComponent(VisualComponent):
    """
    Planned-time bar pinned to the bottom of the page.

    A change of highlighted slide rebuilds the SVG. Ticks that only move the
    clock rewrite the elapsed bar's `width` and `style` in place.
    """

    kind = ComponentKind.TIMELINE

    def __init__(self, timegroups: Sequence[Timegroup]) -> None:
        validate_timegroups(timegroups)
        super().__init__(
            svg_element(
                "svg",
                {
                    "id": "timeline",
                    "width": "100%",
                    "viewBox": "0 0 1000 10",
                    "preserveAspectRatio": "none",
                    "style": "position:absolute; bottom:0; left:0",
                },
            )
        )
        self.timegroups = tuple(timegroups)
        self.total_duration = total_duration(self.timegroups)
        self.layout: TimelineLayout | None = None
        self._highlighted_index: int | None = None
        self._duration_box: Element | None = None

    def _render(self, state: TimelineState) -> None:
        layout = layout_timeline(self.timegroups, state.elapsed_seconds, state.highlighted_index, state.running)
        if self._duration_box is None or state.highlighted_index != self._highlighted_index:
            self._rebuild(layout)
            self._highlighted_index = state.highlighted_index
        else:
            self._set_elapsed(layout)
        self.layout = layout

    def _rebuild(self, layout: TimelineLayout) -> None:
        self._element.clear()
        for seg in layout.segments:
            box = svg_element("rect")
            box.set("width", percent(seg.width))
            box.set("height", "50%")
            box.set("style", rgb((seg.shade, seg.shade, seg.shade)))
            box.set("y", "0%")
            box.set("x", percent(seg.x))
            self._element.append(box)

        if layout.highlight is not None:
            mark = svg_element("rect", {"class": "timeline-highlight"})
            mark.set("width", percent(layout.highlight.width))
            mark.set("height", "20%")
            mark.set("style", rgb(HIGHLIGHT_COLOR))
            mark.set("y", "15%")
            mark.set("x", percent(layout.highlight.x))
            self._element.append(mark)

        self._duration_box = svg_element("rect", {"class": "timeline-elapsed"})
        self._duration_box.set("y", "50%")
        self._duration_box.set("height", "50%")
        self._set_elapsed(layout)
        self._element.append(self._duration_box)

    def _set_elapsed(self, layout: TimelineLayout) -> None:
        assert self._duration_box is not None
        self._duration_box.set("width", percent(layout.elapsed.width))
        self._duration_box.set("style", rgb(layout.elapsed.color))


class FrontPageComponent(VisualComponent):
    """Splash screen shown until the speaker starts the talk."""

    kind = ComponentKind.FRONT_PAGE

    def __init__(self) -> None:
        super().__init__(Element("center", {"id": "front-page"}))

    def _render(self, definition: PresentationDefinition) -> None:
        self._element.clear()
        if definition.front_page_image is not None:
            self._element.append(definition.front_page_image)

        details = Element("table", {"class": "front-page"})
        rows = [
            ("Event:", definition.occasion),
            ("Title:", definition.title),
            ("Duration:", format_duration(definition.total_duration)),
            ("Speaker:", definition.author.name),
        ]
        for label, value in rows:
            tr = Element("tr")
            tr.append(Element("td", children=[Element("b", children=[label])]))
            tr.append(Element("td", children=[str(value)]))
            details.append(tr)
        self._element.append(details)


def front_page_image(src: str | None) -> Element | None:
    if not src:
        return None
    return image_node(src, "width: 1000px; padding: 100px;")
