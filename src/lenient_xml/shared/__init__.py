"""Shared utilities for lenient XML parsing.

This module provides position tracking, warning records, exceptions,
configuration objects and logging helpers used by every layer.
"""

from .config import ParserConfig
from .errors import (
    ConfigError,
    ConfigValidationError,
    InputTooLargeError,
    LenientXMLError,
    MarkupSyntaxError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .position import Position, line_and_column
from .result import ParseWarning, PerformanceMetrics, WarningKind

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "InputTooLargeError",
    "LenientXMLError",
    "MarkupSyntaxError",
    "ParseWarning",
    "ParserConfig",
    "PerformanceMetrics",
    "Position",
    "WarningKind",
    "configure_logging",
    "get_logger",
    "line_and_column",
]
