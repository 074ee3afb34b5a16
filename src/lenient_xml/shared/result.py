"""Warning records and performance metrics for lenient XML parsing.

Warnings describe malformed markup the parser recovered from. They are
collected in detection order and returned alongside the finished tree.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

from .position import line_and_column


class WarningKind(Enum):
    """Kinds of recoverable problems reported during parsing."""

    DUPLICATE_ATTRIBUTE = auto()  # Same key repeated inside one tag
    UNCLOSED_TAG = auto()         # Element never closed before its parent
    UNMATCHED_TAG = auto()        # Close tag with no open element of that name


@dataclass
class ParseWarning:
    """Single recoverable diagnostic with its source offset."""

    kind: WarningKind
    offset: int
    message: str
    name: Optional[str] = None
    document: Optional[str] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate warning entry."""
        if not self.message:
            raise ValueError("Warning message cannot be empty")
        if self.offset < 0:
            raise ValueError("Warning offset must be >= 0")

    @property
    def line(self) -> Optional[int]:
        """1-based line of the warning, when the source is known."""
        if self.document is None:
            return None
        return line_and_column(self.document, self.offset)[0]

    @property
    def column(self) -> Optional[int]:
        """1-based column of the warning, when the source is known."""
        if self.document is None:
            return None
        return line_and_column(self.document, self.offset)[1]

    def to_dict(self) -> Dict[str, Any]:
        """Convert warning to dictionary representation."""
        result: Dict[str, Any] = {
            "kind": self.kind.name,
            "offset": self.offset,
            "message": self.message,
        }
        if self.name is not None:
            result["name"] = self.name
        if self.document is not None:
            result["line"] = self.line
            result["column"] = self.column
        return result

    def __str__(self) -> str:
        if self.document is not None:
            return f"{self.line}:{self.column}: {self.message}"
        return f"@{self.offset}: {self.message}"


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single parse."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tags_scanned: int = 0
    nodes_created: int = 0
    max_depth: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "characters_processed": self.characters_processed,
            "tags_scanned": self.tags_scanned,
            "nodes_created": self.nodes_created,
            "max_depth": self.max_depth,
        }
