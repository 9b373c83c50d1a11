"""Rendering of node forests back to markup.

Serialization is total: every node value has a rendering and nothing here
raises for well-typed input.
"""

import html
from typing import FrozenSet, Iterable, List, Optional, Sequence, Union

from html_editor.nodes import (
    Comment,
    Doctype,
    DoctypeKind,
    Element,
    Node,
    RawHTML,
    Text,
    is_void_tag,
)
from html_editor.shared.config import DEFAULT_RAW_TEXT_ELEMENTS

Serializable = Union[Node, Sequence[Node]]


def escape_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` in character data."""
    return html.escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return value.replace("&", "&amp;").replace('"', "&quot;")


def render_attributes(attrs: Sequence[tuple]) -> str:
    """Render attribute pairs in order; an empty value gives a bare name."""
    return " ".join(
        name if not value else f'{name}="{escape_attribute(value)}"'
        for name, value in attrs
    )


class HTMLSerializer:
    """Renders nodes, elements and forests to markup text.

    Direct text children of elements named in ``raw_text_elements`` are
    written unescaped. The set must match the one the markup was tokenized
    with, otherwise round trips through the parser are not stable.
    """

    def __init__(self, raw_text_elements: Optional[Iterable[str]] = None) -> None:
        if raw_text_elements is None:
            raw_text_elements = DEFAULT_RAW_TEXT_ELEMENTS
        self.raw_text_elements: FrozenSet[str] = frozenset(
            name.lower() for name in raw_text_elements
        )

    def serialize(self, obj: Serializable) -> str:
        parts: List[str] = []
        if isinstance(obj, (list, tuple)):
            for node in obj:
                self._render(node, parts)
        else:
            self._render(obj, parts)
        return "".join(parts)

    def _render(self, node: Node, parts: List[str]) -> None:
        if isinstance(node, Element):
            self._render_element(node, parts)
        elif isinstance(node, Text):
            parts.append(escape_text(node.data))
        elif isinstance(node, Comment):
            parts.append(f"<!--{node.data}-->")
        elif isinstance(node, Doctype):
            parts.append(self._render_doctype(node))
        elif isinstance(node, RawHTML):
            parts.append(node.data)
        else:
            raise TypeError(f"Cannot serialize {type(node).__name__}")

    def _render_doctype(self, doctype: Doctype) -> str:
        if doctype.kind is DoctypeKind.XML:
            return f'<?xml version="{doctype.version}" encoding="{doctype.encoding}"?>'
        return "<!DOCTYPE html>"

    def _render_element(self, element: Element, parts: List[str]) -> None:
        name = element.name
        if element.attrs:
            parts.append(f"<{name} {render_attributes(element.attrs)}>")
        else:
            parts.append(f"<{name}>")

        # Void elements never render children or a closing tag.
        if is_void_tag(name):
            return

        if name.lower() in self.raw_text_elements:
            for child in element.children:
                if isinstance(child, Text):
                    parts.append(child.data)
                else:
                    self._render(child, parts)
        else:
            for child in element.children:
                self._render(child, parts)

        parts.append(f"</{name}>")


_default_serializer = HTMLSerializer()


def to_html(
    obj: Serializable, raw_text_elements: Optional[Iterable[str]] = None
) -> str:
    """Render a node, an element or a list of nodes to markup.

    ``raw_text_elements`` defaults to ``script`` and ``style``.
    """
    if raw_text_elements is None:
        return _default_serializer.serialize(obj)
    return HTMLSerializer(raw_text_elements).serialize(obj)
