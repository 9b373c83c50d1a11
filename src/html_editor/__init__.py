"""html_editor: parse HTML into a node forest and render it back.

Parsing runs markup text through the tokenizer and the tree builder and
returns an ordered list of top-level nodes; serialization renders nodes back
to markup, keeping attribute order, comments, doctypes and raw script/style
bodies intact.

    >>> from html_editor import parse, to_html
    >>> nodes = parse('<script src="index.js" defer></script>')
    >>> to_html(nodes)
    '<script src="index.js" defer></script>'
"""

__version__ = "0.1.0"
__author__ = "html_editor developers"

from .api import HTMLParser, parse, parse_document
from .nodes import (
    VOID_TAGS,
    Comment,
    Doctype,
    DoctypeKind,
    Element,
    Node,
    RawHTML,
    Text,
    is_element,
    iter_elements,
    new_element,
    trim,
)
from .serialization import HTMLSerializer, to_html
from .shared import (
    ConfigError,
    ConfigValidationError,
    HTMLEditorError,
    InvalidTagError,
    ParserConfig,
    StructureError,
    TokenizerConfig,
    TreeConfig,
)
from .tree import ParseResult

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Parsing and serialization
    "parse",
    "parse_document",
    "to_html",
    "HTMLParser",
    "HTMLSerializer",
    "ParseResult",

    # Node model
    "VOID_TAGS",
    "Comment",
    "Doctype",
    "DoctypeKind",
    "Element",
    "Node",
    "RawHTML",
    "Text",
    "is_element",
    "iter_elements",
    "new_element",
    "trim",

    # Configuration
    "ParserConfig",
    "TokenizerConfig",
    "TreeConfig",

    # Errors
    "ConfigError",
    "ConfigValidationError",
    "HTMLEditorError",
    "InvalidTagError",
    "StructureError",
]
