"""Public parsing API and third-party integration adapters."""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    BeautifulSoupAdapter,
    ConversionResult,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .parser import HTMLParser, parse, parse_document

__all__ = [
    "AdapterMetadata",
    "AdapterRegistry",
    "BeautifulSoupAdapter",
    "ConversionResult",
    "HTMLParser",
    "IntegrationAdapter",
    "LxmlAdapter",
    "get_adapter",
    "list_available_adapters",
    "parse",
    "parse_document",
    "register_adapter",
]
