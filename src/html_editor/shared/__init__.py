"""Shared utilities for HTML parsing.

This module provides the configuration objects, diagnostic and metric types,
and logging helpers used by the tokenizer, tree builder and public API.
"""

from .config import (
    DEFAULT_RAW_TEXT_ELEMENTS,
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TokenizerConfig,
    TreeConfig,
)
from .exceptions import (
    HTMLEditorError,
    InvalidTagError,
    StructureError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "DEFAULT_RAW_TEXT_ELEMENTS",
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "HTMLEditorError",
    "InvalidTagError",
    "ParserConfig",
    "PerformanceMetrics",
    "StructureError",
    "TokenizerConfig",
    "TreeConfig",
    "get_logger",
]
