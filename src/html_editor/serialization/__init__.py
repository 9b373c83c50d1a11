"""Serialization of node forests back to markup."""

from .serializer import (
    HTMLSerializer,
    Serializable,
    escape_attribute,
    escape_text,
    render_attributes,
    to_html,
)

__all__ = [
    "HTMLSerializer",
    "Serializable",
    "escape_attribute",
    "escape_text",
    "render_attributes",
    "to_html",
]
