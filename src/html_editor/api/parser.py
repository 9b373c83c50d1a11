"""Public parsing API.

Module-level functions cover the common case; :class:`HTMLParser` holds a
configuration for repeated use and keeps simple statistics about its calls.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

from html_editor.nodes import Node
from html_editor.serialization import HTMLSerializer, Serializable
from html_editor.shared import HTMLEditorError, ParserConfig, get_logger
from html_editor.tokenization import HTMLTokenizer
from html_editor.tree import HTMLTreeBuilder, ParseResult

# Max length for content preview in logs
PREVIEW_LENGTH = 100


def parse_document(
    markup: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse markup into a ParseResult carrying the forest and its diagnostics.

    Args:
        markup: HTML markup text
        config: Parser configuration (defaults to ParserConfig())
        correlation_id: Optional correlation ID, overriding the config's

    Returns:
        ParseResult with the top-level nodes, repairs and metrics

    Raises:
        InvalidTagError: If a tag is malformed
        StructureError: If tags do not balance and strict mode is enabled

    Examples:
        >>> result = parse_document('<p>a<b>b</p>')
        >>> result.repair_count
        1
    """
    return HTMLParser(config=config, correlation_id=correlation_id).parse_document(markup)


def parse(
    markup: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> List[Node]:
    """Parse markup into an ordered list of top-level nodes.

    Examples:
        >>> nodes = parse('<div id="a">hi</div>')
        >>> nodes[0].name, nodes[0].attrs
        ('div', [('id', 'a')])
    """
    return parse_document(markup, config, correlation_id).nodes


class HTMLParser:
    """Reusable parser bound to one configuration.

    Each call builds fresh tokenizer and tree-builder instances and the call
    statistics are guarded by a lock, so a parser may be shared between
    threads. :meth:`to_html` renders with the same raw-text element set the
    tokenizer uses, so parse and serialize stay consistent.

    Examples:
        >>> parser = HTMLParser(ParserConfig.strict())
        >>> parser.parse('<ul><li>one</li></ul>')[0].name
        'ul'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            config: Parser configuration (defaults to ParserConfig())
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "html_parser")

        self._parse_count = 0
        self._failed_parses = 0
        self._total_processing_time = 0.0
        self._stats_lock = threading.Lock()
        self._serializer = HTMLSerializer(self.config.tokenizer.raw_text_elements)

    @property
    def serializer(self) -> HTMLSerializer:
        """Serializer matching the tokenizer configuration."""
        return self._serializer

    def to_html(self, obj: Serializable) -> str:
        """Render nodes with this parser's raw-text element set."""
        return self._serializer.serialize(obj)

    def parse(self, markup: str) -> List[Node]:
        """Parse markup into an ordered list of top-level nodes."""
        return self.parse_document(markup).nodes

    def parse_document(self, markup: str) -> ParseResult:
        """Parse markup into a ParseResult."""
        if not isinstance(markup, str):
            raise TypeError(f"markup must be str, not {type(markup).__name__}")

        config = self.config
        start_time = time.time()
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Starting parse",
                extra={
                    "content_length": len(markup),
                    "content_preview": markup[:PREVIEW_LENGTH],
                }
            )

        tokenizer = HTMLTokenizer(config.tokenizer, self.correlation_id)
        builder = HTMLTreeBuilder(
            config.tree,
            correlation_id=self.correlation_id,
            enable_diagnostics=config.enable_diagnostics,
        )

        try:
            result = builder.build(tokenizer.tokenize(markup))
        except HTMLEditorError as e:
            self._record_call((time.time() - start_time) * 1000, failed=True)
            self.logger.warning(
                "Parse failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise

        processing_time = (time.time() - start_time) * 1000
        self._record_call(processing_time, failed=False)
        result.performance.processing_time_ms = processing_time
        result.performance.characters_processed = len(markup)
        result.raw_text_elements = config.tokenizer.raw_text_elements

        self.logger.info(
            "Parse completed",
            extra={
                "top_level_nodes": len(result.nodes),
                "repair_count": result.repair_count,
                "processing_time_ms": processing_time,
            }
        )
        return result

    def _record_call(self, processing_time: float, failed: bool) -> None:
        with self._stats_lock:
            self._parse_count += 1
            if failed:
                self._failed_parses += 1
            self._total_processing_time += processing_time

    def reconfigure(self, config: ParserConfig) -> None:
        """Swap the configuration used by subsequent calls."""
        self.config = config
        self._serializer = HTMLSerializer(config.tokenizer.raw_text_elements)
        if config.correlation_id is not None:
            self.correlation_id = config.correlation_id
            self.logger = get_logger(__name__, self.correlation_id, "html_parser")

    @property
    def statistics(self) -> Dict[str, Any]:
        """Call statistics accumulated since creation or the last reset."""
        with self._stats_lock:
            parse_count = self._parse_count
            failed = self._failed_parses
            total_time = self._total_processing_time
        successful = parse_count - failed
        return {
            "parse_count": parse_count,
            "successful_parses": successful,
            "failed_parses": failed,
            "success_rate": successful / parse_count if parse_count else 0.0,
            "total_processing_time_ms": total_time,
            "average_processing_time_ms": total_time / parse_count if parse_count else 0.0,
        }

    def reset_statistics(self) -> None:
        with self._stats_lock:
            self._parse_count = 0
            self._failed_parses = 0
            self._total_processing_time = 0.0
