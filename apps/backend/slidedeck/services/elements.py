from __future__ import annotations

from html import escape
from typing import Any, Iterable, Union

# Void elements never get a closing tag in HTML output.
_VOID_TAGS = {"img", "br", "hr", "input", "meta", "link"}

# SVG shapes are emitted self-closing when they have no children.
_SVG_LEAVES = {"rect", "polygon", "circle", "line", "path", "ellipse", "polyline"}


class Raw(str):
    """Pre-rendered markup, emitted verbatim by `Element.to_html`."""


Child = Union["Element", str]


class Element:
    """
    Minimal mutable HTML/SVG node.

    Components own exactly one root Element and mutate only its subtree.
    """

    __slots__ = ("tag", "attrs", "children")

    def __init__(self, tag: str, attrs: dict[str, Any] | None = None, children: Iterable[Child] | None = None) -> None:
        self.tag = tag
        self.attrs: dict[str, str] = {}
        self.children: list[Child] = []
        for k, v in (attrs or {}).items():
            self.set(k, v)
        for c in children or []:
            self.append(c)

    def set(self, name: str, value: Any) -> None:
        self.attrs[name] = str(value)

    def get(self, name: str) -> str | None:
        return self.attrs.get(name)

    def append(self, child: Child) -> Child:
        if not isinstance(child, (Element, str)):
            raise TypeError(f"Cannot append {type(child).__name__} to <{self.tag}>")
        self.children.append(child)
        return child

    def clear(self) -> None:
        self.children = []

    def set_text(self, text: Any) -> None:
        # Same effect as assigning innerHTML to a plain value.
        self.children = [str(text)]

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    def find(self, element_id: str) -> Element | None:
        if self.id == element_id:
            return self
        for c in self.children:
            if isinstance(c, Element):
                hit = c.find(element_id)
                if hit is not None:
                    return hit
        return None

    def text_content(self) -> str:
        out: list[str] = []
        for c in self.children:
            out.append(c.text_content() if isinstance(c, Element) else str(c))
        return "".join(out)

    def to_html(self) -> str:
        attrs = "".join(f' {k}="{escape(v, quote=True)}"' for k, v in self.attrs.items())
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        if not self.children and self.tag in _SVG_LEAVES:
            return f"<{self.tag}{attrs}/>"
        inner: list[str] = []
        for c in self.children:
            if isinstance(c, Element):
                inner.append(c.to_html())
            elif isinstance(c, Raw):
                inner.append(str(c))
            else:
                inner.append(escape(c, quote=False))
        return f"<{self.tag}{attrs}>{''.join(inner)}</{self.tag}>"

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, id={self.id!r}, children={len(self.children)})"


def text_node(text: Any) -> str:
    return str(text)


def raw_node(html: str) -> Raw:
    return Raw(html)


def wrap_node(element_id: str, node: Child) -> Element:
    return Element("div", {"id": element_id}, [node])


def link_node(href: str, text: str) -> Element:
    return Element("a", {"href": href}, [text])


def image_node(src: str, style: str | None = None) -> Element:
    el = Element("img", {"src": src})
    if style is not None:
        el.set("style", style)
    return el


def svg_element(name: str, attrs: dict[str, Any] | None = None) -> Element:
    el = Element(name, attrs)
    if name == "svg":
        el.set("xmlns", "http://www.w3.org/2000/svg")
    return el


def rgb(color: tuple[float, float, float]) -> str:
    """
    Fill style for a color given as 0..1 floats.
    Channels are scaled to 0..255 and printed the way a browser would accept them.
    """
    c = [_fmt_number(255 * ch) for ch in color]
    return f"fill:rgb({c[0]}, {c[1]}, {c[2]}); stroke:none"


def percent(fraction: float) -> str:
    return f"{_fmt_number(100 * fraction)}%"


def _fmt_number(v: float) -> str:
    # Drops float noise such as 204.00000000000003.
    fv = round(float(v), 6)
    if abs(fv - round(fv)) < 1e-9:
        return str(int(round(fv)))
    return repr(fv)


def arrow_node(x_scale: int) -> Element:
    """Triangle arrow; `x_scale=-1` points left, `1` points right."""
    el = svg_element("svg", {"width": 20, "height": 20, "viewBox": "-50 -50 100 100"})
    arrow = svg_element("g", {"transform": f"scale({x_scale} 1)"})
    arrow.append(
        svg_element(
            "polygon",
            {
                "points": "-45,-45 -45,45 45,0",
                "style": "fill:rgb(100,100,100);stroke:black;stroke-width:5",
            },
        )
    )
    el.append(arrow)
    return el


def left_arrow_node() -> Element:
    return arrow_node(-1)


def right_arrow_node() -> Element:
    return arrow_node(1)
