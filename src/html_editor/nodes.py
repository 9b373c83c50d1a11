"""Node types of the parsed HTML forest.

A parsed document is a plain ``list`` of nodes. Each node is exactly one of
:class:`Element`, :class:`Text`, :class:`Comment`, :class:`Doctype` or
:class:`RawHTML`; ``Node`` is the union of those classes. Nodes hold no
reference to their parent: a node is owned by the list it sits in.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

Attribute = Tuple[str, str]

VOID_TAGS = frozenset({
    "area",
    "base",
    "br",
    "col",
    "command",
    "embed",
    "hr",
    "img",
    "input",
    "keygen",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
})


def is_void_tag(name: str) -> bool:
    """Check whether ``name`` names a void element (case-insensitive)."""
    return name.lower() in VOID_TAGS


class DoctypeKind(Enum):
    """Kinds of document-level declarations."""

    HTML = auto()   # <!DOCTYPE html> and any other <!...> declaration
    XML = auto()    # <?xml version="..." encoding="..."?>


@dataclass(frozen=True)
class Doctype:
    """Document declaration: an HTML doctype or an XML prolog."""

    kind: DoctypeKind
    version: Optional[str] = None
    encoding: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate that only XML declarations carry version and encoding."""
        if self.kind is DoctypeKind.XML:
            if self.version is None:
                raise ValueError("XML declaration requires a version")
            if self.encoding is None:
                raise ValueError("XML declaration requires an encoding")
        elif self.version is not None or self.encoding is not None:
            raise ValueError("HTML doctype cannot carry version or encoding")

    @classmethod
    def for_html(cls) -> "Doctype":
        return cls(DoctypeKind.HTML)

    @classmethod
    def for_xml(cls, version: str, encoding: str) -> "Doctype":
        return cls(DoctypeKind.XML, version=version, encoding=encoding)

    def html(self) -> str:
        from html_editor.serialization import to_html
        return to_html(self)


@dataclass
class Text:
    """Character data, stored decoded."""

    data: str

    def html(self) -> str:
        from html_editor.serialization import to_html
        return to_html(self)


@dataclass
class Comment:
    """Comment body, stored exactly as written between ``<!--`` and ``-->``."""

    data: str

    def html(self) -> str:
        from html_editor.serialization import to_html
        return to_html(self)


@dataclass
class RawHTML:
    """Pre-rendered markup emitted verbatim by the serializer."""

    data: str

    def html(self) -> str:
        from html_editor.serialization import to_html
        return to_html(self)


@dataclass
class Element:
    """An HTML element with ordered attributes and owned children.

    Attribute names are not required to be unique; the list keeps whatever
    the tokenizer captured, in source order. An attribute whose value is the
    empty string is rendered as a bare name (``defer``).
    """

    name: str
    attrs: List[Attribute] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.name or self.name.isspace():
            raise ValueError("Element name cannot be empty")

    @classmethod
    def new(
        cls,
        name: str,
        attrs: Optional[Iterable[Attribute]] = None,
        children: Optional[Iterable["Node"]] = None,
    ) -> "Element":
        """Build an element, copying the given attribute and child sequences."""
        return cls(
            name=name,
            attrs=[(key, value) for key, value in (attrs or ())],
            children=list(children or ()),
        )

    @property
    def is_void(self) -> bool:
        return is_void_tag(self.name)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def has_attribute(self, name: str) -> bool:
        return any(key == name for key, _ in self.attrs)

    def set_attribute(self, name: str, value: str) -> None:
        """Replace the first attribute called ``name`` or append a new one."""
        for index, (key, _) in enumerate(self.attrs):
            if key == name:
                self.attrs[index] = (name, value)
                return
        self.attrs.append((name, value))

    def remove_attribute(self, name: str) -> bool:
        """Remove every attribute called ``name``; report whether any existed."""
        kept = [(key, value) for key, value in self.attrs if key != name]
        removed = len(kept) != len(self.attrs)
        self.attrs = kept
        return removed

    def add_child(self, child: "Node") -> None:
        if not isinstance(child, NODE_TYPES):
            raise TypeError("Child must be an Element, Text, Comment, Doctype or RawHTML")
        self.children.append(child)

    def iter_elements(self) -> Iterator["Element"]:
        """Yield every descendant element in document order."""
        yield from iter_elements(self.children)

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(
            node.data for node in _iter_nodes(self.children) if isinstance(node, Text)
        )

    def html(self) -> str:
        from html_editor.serialization import to_html
        return to_html(self)


Node = Union[Element, Text, Comment, Doctype, RawHTML]

NODE_TYPES = (Element, Text, Comment, Doctype, RawHTML)


def new_element(
    name: str,
    attrs: Optional[Iterable[Attribute]] = None,
    children: Optional[Iterable[Node]] = None,
) -> Element:
    """Shorthand for :meth:`Element.new`."""
    return Element.new(name, attrs, children)


def is_element(node: Node) -> bool:
    return isinstance(node, Element)


def _iter_nodes(nodes: Sequence[Node]) -> Iterator[Node]:
    for node in nodes:
        yield node
        if isinstance(node, Element):
            yield from _iter_nodes(node.children)


def iter_elements(nodes: Sequence[Node]) -> Iterator[Element]:
    """Yield every element of a forest in document order."""
    for node in _iter_nodes(nodes):
        if isinstance(node, Element):
            yield node


def trim(nodes: List[Node]) -> List[Node]:
    """Remove whitespace-only text nodes from a forest, recursively.

    The list and the elements in it are modified in place; the same list is
    returned for chaining. Content of raw-text elements is left untouched.
    """
    nodes[:] = [
        node for node in nodes
        if not (isinstance(node, Text) and not node.data.strip())
    ]
    for node in nodes:
        if isinstance(node, Element) and node.name.lower() not in ("script", "style"):
            trim(node.children)
    return nodes
