"""Tree building from token streams.

The builder keeps an explicit stack of open elements and returns the
document as an ordered forest of top-level nodes, since markup has no forced
single root. Unbalanced tags are repaired by default:

* an end tag closes the innermost open element of the same name, implicitly
  closing every element opened after it;
* an end tag matching no open element is ignored;
* elements still open at the end of input are closed there.

Each repair is recorded on the :class:`ParseResult`. In strict mode the same
situations raise :class:`StructureError` instead.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from html_editor.nodes import Element, Node, is_void_tag, iter_elements, trim
from html_editor.shared import (
    DEFAULT_RAW_TEXT_ELEMENTS,
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    StructureError,
    TreeConfig,
    get_logger,
)
from html_editor.tokenization import Token, TokenType


@dataclass
class StructureRepair:
    """Information about a structural repair made during tree building."""

    repair_type: str
    description: str
    tag_name: str
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate repair information."""
        if not self.repair_type:
            raise ValueError("Repair type cannot be empty")
        if not self.description:
            raise ValueError("Repair description cannot be empty")


@dataclass
class ParseResult:
    """Forest produced by a parse call, with diagnostics and metrics."""

    nodes: List[Node] = field(default_factory=list)
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    repairs: List[StructureRepair] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None
    raw_text_elements: FrozenSet[str] = DEFAULT_RAW_TEXT_ELEMENTS

    @property
    def element_count(self) -> int:
        """Total number of elements in the forest."""
        return sum(1 for _ in iter_elements(self.nodes))

    @property
    def has_repairs(self) -> bool:
        return len(self.repairs) > 0

    @property
    def repair_count(self) -> int:
        return len(self.repairs)

    @property
    def has_errors(self) -> bool:
        """Check if any ERROR diagnostics were recorded."""
        return any(d.severity is DiagnosticSeverity.ERROR for d in self.diagnostics)

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add a diagnostic entry to the result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [d for d in self.diagnostics if d.severity is severity]

    def html(self) -> str:
        """Serialize the forest back to markup.

        Uses the raw-text element set the forest was tokenized with.
        """
        from html_editor.serialization import to_html
        return to_html(self.nodes, self.raw_text_elements)

    def summary(self) -> Dict[str, Any]:
        """Summarize the parse for logging or reporting."""
        return {
            "success": self.success,
            "top_level_nodes": len(self.nodes),
            "element_count": self.element_count,
            "repair_count": self.repair_count,
            "repair_types": sorted({r.repair_type for r in self.repairs}),
            "diagnostic_count": len(self.diagnostics),
            "processing_time_ms": self.performance.processing_time_ms,
            "correlation_id": self.correlation_id,
        }


class HTMLTreeBuilder:
    """Builds a node forest from a token stream.

    A builder holds per-call state and must not be shared between threads
    while a :meth:`build` call is running.
    """

    def __init__(
        self,
        config: Optional[TreeConfig] = None,
        correlation_id: Optional[str] = None,
        enable_diagnostics: bool = True,
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Tree configuration (defaults to TreeConfig())
            correlation_id: Optional correlation ID for request tracking
            enable_diagnostics: Record DiagnosticEntry objects on the result
        """
        self.config = config or TreeConfig()
        self.correlation_id = correlation_id
        self.enable_diagnostics = enable_diagnostics
        self.logger = get_logger(__name__, correlation_id, "html_tree_builder")

        self._stack: List[Element] = []
        self._nodes: List[Node] = []
        self._result = ParseResult(correlation_id=correlation_id)

    def build(self, tokens: Iterable[Token]) -> ParseResult:
        """Build the forest for ``tokens``.

        Tokens are consumed lazily, so errors raised while producing them
        (such as InvalidTagError) propagate to the caller unchanged.

        Raises:
            StructureError: In strict mode, on unmatched or unclosed tags, and
                in any mode when ``max_depth`` is exceeded
        """
        start_time = time.time()
        self._reset_state()
        result = self._result

        token_count = 0
        for token in tokens:
            token_count += 1
            self._process_token(token)

        if self._stack:
            self._close_unclosed_elements()

        if self.config.trim_whitespace:
            trim(self._nodes)

        result.nodes = self._nodes
        result.performance.processing_time_ms = (time.time() - start_time) * 1000
        result.performance.tokens_consumed = token_count
        result.performance.repairs_applied = len(result.repairs)

        self.logger.debug(
            "Tree building completed",
            extra={
                "token_count": token_count,
                "top_level_nodes": len(result.nodes),
                "repair_count": result.repair_count,
            }
        )
        return result

    def _reset_state(self) -> None:
        self._stack = []
        self._nodes = []
        self._result = ParseResult(correlation_id=self.correlation_id)

    def _process_token(self, token: Token) -> None:
        if token.type is TokenType.START:
            self._handle_start_tag(token)
        elif token.type is TokenType.CLOSING:
            self._attach(self._new_element(token))
        elif token.type is TokenType.END:
            self._handle_end_tag(token)
        else:
            self._attach(token.into_node())

    def _new_element(self, token: Token) -> Element:
        self._result.performance.elements_created += 1
        return token.into_element()

    def _attach(self, node: Node) -> None:
        """Append a node to the innermost open element or to the forest."""
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._nodes.append(node)

    def _handle_start_tag(self, token: Token) -> None:
        element = self._new_element(token)
        self._attach(element)
        if is_void_tag(element.name):
            return

        max_depth = self.config.max_depth
        if max_depth is not None and len(self._stack) >= max_depth:
            raise StructureError(
                f"<{element.name}> exceeds the maximum nesting depth of {max_depth}",
                tag_name=element.name,
            )
        self._stack.append(element)

    def _handle_end_tag(self, token: Token) -> None:
        name = token.value
        key = name.lower()

        match_index = -1
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i].name.lower() == key:
                match_index = i
                break

        if match_index < 0:
            self._handle_orphaned_end_tag(token)
            return

        implicitly_closed = self._stack[match_index + 1:]
        if implicitly_closed:
            if self.config.strict_mode:
                raise StructureError(
                    f"<{implicitly_closed[-1].name}> does not match the </{name}>",
                    tag_name=implicitly_closed[-1].name,
                )
            for element in reversed(implicitly_closed):
                self._record_repair(
                    "implicit_close",
                    f"Implicitly closed <{element.name}> at </{name}>",
                    element.name,
                    token.offset,
                    DiagnosticSeverity.WARNING,
                )
        del self._stack[match_index:]

    def _handle_orphaned_end_tag(self, token: Token) -> None:
        name = token.value
        if is_void_tag(name):
            # </br> and friends carry no structure; drop them quietly.
            self._diagnose(
                DiagnosticSeverity.INFO,
                f"End tag for void element </{name}> ignored",
                {"tag": name, "offset": token.offset},
            )
            return
        if self.config.strict_mode:
            raise StructureError(f"No start tag matches </{name}>", tag_name=name)
        self._record_repair(
            "orphaned_end_tag",
            f"Orphaned closing tag </{name}> ignored",
            name,
            token.offset,
            DiagnosticSeverity.WARNING,
        )

    def _close_unclosed_elements(self) -> None:
        """Close elements still open at end of input, innermost first."""
        if self.config.strict_mode:
            innermost = self._stack[-1].name
            raise StructureError(f"<{innermost}> is not closed", tag_name=innermost)

        while self._stack:
            element = self._stack.pop()
            self._record_repair(
                "unclosed_element",
                f"Auto-closed unclosed element <{element.name}> at end of input",
                element.name,
                None,
                DiagnosticSeverity.INFO,
            )

    def _record_repair(
        self,
        repair_type: str,
        description: str,
        tag_name: str,
        offset: Optional[int],
        severity: DiagnosticSeverity,
    ) -> None:
        self._result.repairs.append(
            StructureRepair(repair_type, description, tag_name, offset)
        )
        self._diagnose(severity, description, {"tag": tag_name, "offset": offset})
        if severity is DiagnosticSeverity.WARNING:
            self.logger.warning(description, extra={"tag": tag_name, "offset": offset})

    def _diagnose(
        self, severity: DiagnosticSeverity, message: str, details: Dict[str, Any]
    ) -> None:
        if self.enable_diagnostics:
            self._result.add_diagnostic(severity, message, "structure_repair", details)
