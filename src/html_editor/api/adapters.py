"""Integration adapters for lxml and BeautifulSoup.

Adapters convert a parsed forest into another library's tree and back. Both
directions go through markup text: the forest is serialized and handed to the
target library's parser, and a target tree is rendered by that library and
parsed again here. Conversion failures are reported on the returned
:class:`ConversionResult` instead of being raised.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from html_editor.nodes import Node
from html_editor.serialization import escape_text, to_html
from html_editor.shared import DiagnosticEntry, DiagnosticSeverity, get_logger
from html_editor.tree import ParseResult

from .parser import parse

ForestInput = Union[ParseResult, Sequence[Node]]


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str
    supported_versions: List[str] = field(default_factory=list)


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Base class for bidirectional conversion with a third-party tree library."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def _to_target(self, markup: str) -> Any:
        """Build the target library's representation of ``markup``."""

    @abstractmethod
    def _target_to_markup(self, target_data: Any) -> str:
        """Render the target library's representation back to markup."""

    def to_target(self, forest: ForestInput) -> ConversionResult:
        """Convert a ParseResult or a list of nodes to the target format."""
        start_time = time.time()
        nodes = forest.nodes if isinstance(forest, ParseResult) else list(forest)
        try:
            markup = to_html(nodes)
            converted = self._to_target(markup)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                forest,
                (time.time() - start_time) * 1000,
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=forest,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"markup_length": len(markup)},
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert the target format to a list of nodes."""
        start_time = time.time()
        try:
            markup = self._target_to_markup(target_data)
            nodes = parse(markup, correlation_id=self.correlation_id)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                (time.time() - start_time) * 1000,
            )

        return ConversionResult(
            success=True,
            converted_data=nodes,
            original_data=target_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"markup_length": len(markup)},
        )

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )


class LxmlAdapter(IntegrationAdapter):
    """Conversion between node forests and lists of ``lxml.html`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Forest to lxml.html fragment elements and back",
            supported_versions=["4.0+"],
        )

    def is_available(self) -> bool:
        try:
            import lxml.html  # noqa: F401
        except ImportError:
            return False
        return True

    def _to_target(self, markup: str) -> Any:
        import lxml.html

        # Leading text comes back as a str, elements as HtmlElement.
        return lxml.html.fragments_fromstring(markup)

    def _target_to_markup(self, target_data: Any) -> str:
        import lxml.html

        if not isinstance(target_data, (list, tuple)):
            target_data = [target_data]
        parts = []
        for item in target_data:
            if isinstance(item, str):
                parts.append(escape_text(item))
            else:
                parts.append(
                    lxml.html.tostring(item, encoding="unicode", with_tail=True)
                )
        return "".join(parts)


class BeautifulSoupAdapter(IntegrationAdapter):
    """Conversion between node forests and ``bs4.BeautifulSoup`` documents."""

    parser_name = "html.parser"

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="beautifulsoup",
            target_library="beautifulsoup4",
            description="Forest to BeautifulSoup (html.parser) and back",
            supported_versions=["4.0+"],
        )

    def is_available(self) -> bool:
        try:
            import bs4  # noqa: F401
        except ImportError:
            return False
        return True

    def _to_target(self, markup: str) -> Any:
        from bs4 import BeautifulSoup

        return BeautifulSoup(markup, self.parser_name)

    def _target_to_markup(self, target_data: Any) -> str:
        if not hasattr(target_data, "decode"):
            raise TypeError(
                f"Expected a BeautifulSoup object, got {type(target_data).__name__}"
            )
        return str(target_data)


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name, or None if unknown or unavailable."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of registered adapters whose library is importable."""
        with self._lock:
            classes = list(self._adapters.values())
        instances = [adapter_class() for adapter_class in classes]
        return [inst.metadata for inst in instances if inst.is_available()]


_adapter_registry = AdapterRegistry()
_adapter_registry.register(LxmlAdapter)
_adapter_registry.register(BeautifulSoupAdapter)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance if its library is available."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()
