"""Tree building engine for HTML parsing.

Key Components:
    HTMLTreeBuilder: Assembles a token stream into a forest of nodes
    ParseResult: Forest plus repairs, diagnostics and metrics
    StructureRepair: Record of one structural repair
"""

from .builder import (
    HTMLTreeBuilder,
    ParseResult,
    StructureRepair,
)

__all__ = [
    "HTMLTreeBuilder",
    "ParseResult",
    "StructureRepair",
]
