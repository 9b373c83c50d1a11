"""Diagnostic and metric types shared by the parsing pipeline."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()       # Informational messages
    WARNING = auto()    # Structure problems that were recovered
    ERROR = auto()      # Problems that made the result incomplete


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "details": dict(self.details or {}),
            "correlation_id": self.correlation_id,
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for a parse call."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_consumed: int = 0
    elements_created: int = 0
    repairs_applied: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_consumed * 1000.0) / self.processing_time_ms

    @property
    def repair_rate(self) -> float:
        """Share of created elements that needed a structural repair."""
        if self.elements_created == 0:
            return 0.0
        return self.repairs_applied / self.elements_created
