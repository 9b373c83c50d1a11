"""Markup tokenization.

:class:`Token` classifies one lexical unit: a complete ``<...>`` substring or
a run of text between tags. :class:`HTMLTokenizer` scans a whole document,
cuts it into those units and yields the tokens lazily.
"""

import html
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Generator, Iterator, Optional, Pattern, Tuple

from html_editor.shared.config import TokenizerConfig
from html_editor.shared.exceptions import InvalidTagError
from html_editor.nodes import (
    Attribute,
    Comment,
    Doctype,
    Element,
    Node,
    Text,
)

from .attributes import QUOTE_CHARS, parse_attributes

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

ALL_SPACES_REASON = 'Tag name cannot be all spaces after "<"'

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Kinds of tokens produced by the tokenizer."""

    START = auto()      # <div>, including void tags such as <img>
    END = auto()        # </div>
    CLOSING = auto()    # <div />
    DOCTYPE = auto()    # <!doctype html> or <?xml ...?>
    COMMENT = auto()    # <!-- comment -->
    TEXT = auto()       # any text between tags


_TAG_TYPES = (TokenType.START, TokenType.END, TokenType.CLOSING)


@dataclass(frozen=True)
class Token:
    """A classified lexical unit.

    ``value`` holds the tag name for START, END and CLOSING tokens and the
    character data for COMMENT and TEXT tokens. ``attrs`` is only populated
    for START and CLOSING tokens, ``doctype`` only for DOCTYPE tokens.
    """

    type: TokenType
    value: str = ""
    attrs: Tuple[Attribute, ...] = ()
    doctype: Optional[Doctype] = None
    offset: Optional[int] = None

    @property
    def is_tag(self) -> bool:
        return self.type in _TAG_TYPES

    @property
    def name(self) -> str:
        """Tag name of a START, END or CLOSING token."""
        if not self.is_tag:
            raise TypeError(f"{self.type.name} token has no tag name")
        return self.value

    @classmethod
    def from_tag(
        cls,
        tag: str,
        decode_attribute_entities: bool = True,
        offset: Optional[int] = None,
    ) -> "Token":
        """Classify one complete ``<...>`` substring.

        Raises:
            InvalidTagError: If the substring is not a recognizable tag
        """
        if not tag.startswith("<") or not tag.endswith(">"):
            raise InvalidTagError(tag, "Invalid tag")

        if tag.endswith("/>"):
            name, attr_str = _split_tag_name(tag, tag[1:-2])
            return cls(
                TokenType.CLOSING,
                name,
                tuple(parse_attributes(attr_str, decode_attribute_entities)),
                offset=offset,
            )
        if tag.startswith("</"):
            name = tag[2:-1].strip()
            if not name:
                raise InvalidTagError(tag, ALL_SPACES_REASON)
            return cls(TokenType.END, name.split()[0], offset=offset)
        if tag.startswith(COMMENT_OPEN):
            return cls.from_comment(tag, offset=offset)
        if tag.startswith("<!"):
            return cls(TokenType.DOCTYPE, doctype=Doctype.for_html(), offset=offset)
        if tag.startswith("<?"):
            return cls(TokenType.DOCTYPE, doctype=_parse_xml_declaration(tag), offset=offset)

        name, attr_str = _split_tag_name(tag, tag[1:-1])
        return cls(
            TokenType.START,
            name,
            tuple(parse_attributes(attr_str, decode_attribute_entities)),
            offset=offset,
        )

    @classmethod
    def from_comment(cls, comment: str, offset: Optional[int] = None) -> "Token":
        """Build a COMMENT token from ``<!--...-->``, keeping the body verbatim."""
        if (
            len(comment) < len(COMMENT_OPEN) + len(COMMENT_CLOSE)
            or not comment.startswith(COMMENT_OPEN)
            or not comment.endswith(COMMENT_CLOSE)
        ):
            raise InvalidTagError(comment, "Comment is not terminated by \"-->\"")
        return cls(TokenType.COMMENT, comment[4:-3], offset=offset)

    @classmethod
    def from_text(
        cls, text: str, decode_entities: bool = True, offset: Optional[int] = None
    ) -> "Token":
        """Build a TEXT token, decoding character references."""
        if decode_entities and "&" in text:
            text = html.unescape(text)
        return cls(TokenType.TEXT, text, offset=offset)

    def into_node(self) -> Node:
        """Convert the token to a childless node."""
        if self.is_tag:
            return self.into_element()
        if self.type is TokenType.DOCTYPE:
            return self.doctype  # type: ignore[return-value]
        if self.type is TokenType.COMMENT:
            return Comment(self.value)
        return Text(self.value)

    def into_element(self) -> Element:
        """Convert a START, END or CLOSING token to a childless element.

        Raises:
            TypeError: For any other token type
        """
        if not self.is_tag:
            raise TypeError(f"Cannot convert {self.type.name} token to element")
        return Element(name=self.value, attrs=list(self.attrs))


def _split_tag_name(tag: str, inner: str) -> Tuple[str, str]:
    stripped = inner.lstrip()
    if not stripped:
        raise InvalidTagError(tag, ALL_SPACES_REASON)
    parts = stripped.split(None, 1)
    # <br/ > leaves the solidus attached to the name
    name = parts[0].rstrip("/")
    if not name:
        raise InvalidTagError(tag, "Tag name cannot be empty")
    attr_str = parts[1].strip() if len(parts) > 1 else ""
    return name, attr_str


def _parse_xml_declaration(tag: str) -> Doctype:
    interior = tag[2:-2] if tag.endswith("?>") else tag[2:-1]
    attrs = parse_attributes(interior)
    found = {}
    for key in ("version", "encoding"):
        value = next((v for k, v in attrs if k == key), None)
        if value is None:
            raise InvalidTagError(
                tag, f"Cannot find {key} attribute in xml declaration"
            )
        found[key] = value
    return Doctype.for_xml(found["version"], found["encoding"])


def _find_tag_end(markup: str, start: int) -> int:
    """Index of the ``>`` closing the tag opened before ``start``, or -1.

    A ``>`` inside a quoted attribute value does not close the tag.
    """
    quote: Optional[str] = None
    for i in range(start, len(markup)):
        char = markup[i]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTE_CHARS:
            quote = char
        elif char == ">":
            return i
    return -1


class HTMLTokenizer:
    """Splits a markup document into tokens.

    Tags are cut on matching angle brackets, comments run to the next
    ``-->`` and the body of raw-text elements (``script``, ``style``) is
    delivered as a single undecoded TEXT token. A ``>`` outside any tag and
    an unterminated ``<...`` at the end of input are text.
    """

    def __init__(
        self,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Tokenizer configuration (defaults to TokenizerConfig())
            correlation_id: Optional correlation ID for tracking requests
        """
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self._raw_text_end: Dict[str, Pattern[str]] = {}

    def tokenize(self, markup: str) -> Iterator[Token]:
        """Yield the tokens of ``markup`` in document order.

        Raises:
            InvalidTagError: On the first malformed tag; tokens before it have
                already been yielded
        """
        logger.debug(
            "Starting tokenization",
            extra={
                "component": "html_tokenizer",
                "correlation_id": self.correlation_id,
                "char_count": len(markup),
            }
        )

        count = 0
        for token in self._scan(markup):
            count += 1
            yield token

        logger.debug(
            "Tokenization completed",
            extra={
                "component": "html_tokenizer",
                "correlation_id": self.correlation_id,
                "token_count": count,
            }
        )

    def _scan(self, markup: str) -> Iterator[Token]:
        length = len(markup)
        pos = 0

        while pos < length:
            lt = markup.find("<", pos)
            if lt == -1:
                break

            if markup.startswith(COMMENT_OPEN, lt):
                close = markup.find(COMMENT_CLOSE, lt + len(COMMENT_OPEN))
                if close == -1:
                    break
                yield from self._text(markup[pos:lt], pos)
                end = close + len(COMMENT_CLOSE)
                yield Token.from_comment(markup[lt:end], offset=lt)
                pos = end
                continue

            gt = _find_tag_end(markup, lt + 1)
            if gt == -1:
                break

            yield from self._text(markup[pos:lt], pos)
            token = Token.from_tag(
                markup[lt:gt + 1],
                decode_attribute_entities=self.config.decode_attribute_entities,
                offset=lt,
            )
            yield token
            pos = gt + 1

            if (
                token.type is TokenType.START
                and token.value.lower() in self.config.raw_text_elements
            ):
                pos = yield from self._raw_text(markup, pos, token.value)

        yield from self._text(markup[pos:], pos)

    def _text(self, text: str, offset: int) -> Iterator[Token]:
        if text:
            yield Token.from_text(text, self.config.decode_entities, offset=offset)

    def _raw_text(
        self, markup: str, pos: int, name: str
    ) -> Generator[Token, None, int]:
        """Yield the body and end tag of a raw-text element; return the new position."""
        key = name.lower()
        pattern = self._raw_text_end.get(key)
        if pattern is None:
            pattern = re.compile(r"</%s\s*>" % re.escape(key), re.IGNORECASE)
            self._raw_text_end[key] = pattern

        match = pattern.search(markup, pos)
        if match is None:
            if pos < len(markup):
                yield Token(TokenType.TEXT, markup[pos:], offset=pos)
            return len(markup)

        if match.start() > pos:
            yield Token(TokenType.TEXT, markup[pos:match.start()], offset=pos)
        end_name = markup[match.start() + 2:match.end() - 1].strip()
        yield Token(TokenType.END, end_name, offset=match.start())
        return match.end()


def tokenize(markup: str, config: Optional[TokenizerConfig] = None) -> Iterator[Token]:
    """Tokenize ``markup`` with a fresh :class:`HTMLTokenizer`."""
    return HTMLTokenizer(config).tokenize(markup)
