"""Exception hierarchy for HTML parsing."""

from typing import Optional


class HTMLEditorError(Exception):
    """Base exception for all errors raised by html_editor."""


class InvalidTagError(HTMLEditorError):
    """Raised when a ``<...>`` substring matches none of the known tag shapes.

    Attributes:
        tag: The offending raw tag substring
        reason: Short human-readable explanation
    """

    def __init__(self, tag: str, reason: str) -> None:
        super().__init__(f"Invalid tag {tag!r}: {reason}")
        self.tag = tag
        self.reason = reason


class StructureError(HTMLEditorError):
    """Raised in strict mode when tags do not balance.

    Attributes:
        tag_name: Name of the element that could not be matched or closed
    """

    def __init__(self, message: str, tag_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.tag_name = tag_name
