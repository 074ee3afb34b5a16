"""Exception types raised by the lenient XML parser.

Recoverable problems never raise; they are reported as ``ParseWarning``
entries. The exceptions here are reserved for lexical faults that make the
rest of the document unscannable and for invalid caller input.
"""

from typing import List, Optional

from .position import line_and_column


class LenientXMLError(Exception):
    """Base class for all parser exceptions."""


class MarkupSyntaxError(LenientXMLError, ValueError):
    """Fatal lexical fault at a specific document offset.

    Attributes:
        document: Source text being parsed
        offset: Offset of the offending character
        message: Human-readable description
        line: 1-based line of ``offset``
        column: 1-based column of ``offset``
    """

    def __init__(self, document: str, offset: int, message: str) -> None:
        self.document = document
        self.offset = offset
        self.message = message
        self.line, self.column = line_and_column(document, offset)
        super().__init__(f"{message} at line {self.line}, column {self.column}")

    def render(self, max_width: int = 80) -> str:
        """Render the offending source line with a caret under the column.

        Long lines are windowed around the caret so the output stays within
        ``max_width`` characters.
        """
        lines = self.document.split("\n")
        source_line = lines[self.line - 1] if self.line <= len(lines) else ""
        caret_index = self.column - 1

        if len(source_line) > max_width:
            window_start = max(0, caret_index - max_width // 2)
            source_line = source_line[window_start:window_start + max_width]
            caret_index -= window_start

        prefix = f"{self.line:>4} | "
        pointer = " " * (len(prefix) + caret_index) + "^"
        return f"{self.message}\n{prefix}{source_line}\n{pointer}"


class InputTooLargeError(LenientXMLError, ValueError):
    """Document exceeds the configured ``max_input_size``."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Input of {size} characters exceeds limit of {limit}")


class ConfigError(LenientXMLError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
