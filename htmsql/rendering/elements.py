"""Minimal element tree used as the rendering target."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_VOID_TAGS: frozenset[str] = frozenset({"br", "hr", "img", "input", "link", "meta"})


@dataclass
class Element:
    """An HTML element with ordered attributes and children.

    String children are text nodes and are escaped on serialization.
    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Element | str] = field(default_factory=list)

    def append(self, child: Element | str | None) -> Element:
        """Append a child; None is ignored. Returns self for chaining."""
        if child is not None:
            self.children.append(child)
        return self

    def extend(self, children: Iterable[Element | str | None]) -> Element:
        for child in children:
            self.append(child)
        return self

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @property
    def classes(self) -> list[str]:
        return self.attrs.get("class", "").split()

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(
            child if isinstance(child, str) else child.text_content for child in self.children
        )

    def iter(self) -> Iterator[Element]:
        """Depth-first iteration over this element and its descendants."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, tag: str | None = None, class_name: str | None = None) -> list[Element]:
        return [
            node
            for node in self.iter()
            if (tag is None or node.tag == tag)
            and (class_name is None or class_name in node.classes)
        ]

    def find(self, tag: str | None = None, class_name: str | None = None) -> Element | None:
        matches = self.find_all(tag, class_name)
        return matches[0] if matches else None

    def to_html(self) -> str:
        attrs_text = "".join(
            f' {name}="{html.escape(value, quote=True)}"' for name, value in self.attrs.items()
        )
        if self.tag in _VOID_TAGS:
            return f"<{self.tag}{attrs_text}>"
        inner = "".join(
            html.escape(child, quote=False) if isinstance(child, str) else child.to_html()
            for child in self.children
        )
        return f"<{self.tag}{attrs_text}>{inner}</{self.tag}>"


def h(
    tag: str,
    *children: Element | str | None,
    class_: str | None = None,
    **attrs: str | None,
) -> Element:
    """Build an element. ``class_`` maps to ``class``; None attributes are omitted."""
    rendered: dict[str, str] = {}
    if class_:
        rendered["class"] = class_
    for name, value in attrs.items():
        if value is not None:
            rendered[name] = value
    return Element(tag, rendered).extend(children)
