"""Source position tracking and character lookup helpers.

Offsets are plain indexes into the document string. Every span in the parser
uses the half-open ``[start, end)`` convention.
"""

from dataclasses import dataclass
from typing import Tuple

WHITE_SPACE = " \t\r\n"
TAG_END = "/>"
WHITE_SPACE_OR_TAG_END = WHITE_SPACE + TAG_END


@dataclass(frozen=True)
class Position:
    """Half-open ``[start, end)`` span into the source document."""

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span boundaries."""
        if self.start < 0:
            raise ValueError("Position start must be >= 0")
        if self.end < self.start:
            raise ValueError("Position end must be >= start")

    @property
    def length(self) -> int:
        """Number of characters covered by the span."""
        return self.end - self.start

    def slice(self, document: str) -> str:
        """Return the source text covered by this span."""
        return document[self.start:self.end]

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


def char_at(document: str, index: int) -> str:
    """Return the character at ``index`` or ``""`` past the end."""
    if 0 <= index < len(document):
        return document[index]
    return ""


def is_one_of(char: str, chars: str) -> bool:
    # "" in chars is always True, so end of input must be excluded explicitly
    return bool(char) and char in chars


def find_next(document: str, chars: str, offset: int = 0) -> int:
    """Return the index of the first character in ``chars`` at or after ``offset``.

    Returns ``len(document)`` when none is found.
    """
    index = offset
    end = len(document)
    while index < end and document[index] not in chars:
        index += 1
    return min(index, end)


def line_and_column(document: str, offset: int) -> Tuple[int, int]:
    """Convert an offset into a 1-based ``(line, column)`` pair."""
    offset = max(0, min(offset, len(document)))
    line = document.count("\n", 0, offset) + 1
    line_start = document.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1
