"""Single-pass tag scanner.

``scan_tag`` reads one ``<...>`` construct starting at a known ``<`` and
returns its name, attributes and closing status. Attribute-level problems
are reported as warnings; only unscannable input raises.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from lenient_xml.shared.errors import MarkupSyntaxError
from lenient_xml.shared.position import (
    TAG_END,
    WHITE_SPACE,
    WHITE_SPACE_OR_TAG_END,
    Position,
    char_at,
    find_next,
    is_one_of,
)
from lenient_xml.shared.result import ParseWarning, WarningKind

QUOTES = "'\""
COMMENT_OPEN = "!--"
COMMENT_CLOSE = "-->"

AttributeScalar = Union[str, bool, None]


@dataclass(frozen=True)
class AttributeValue:
    """Attribute value with the span of its ``key=value`` source text.

    ``value`` is the trimmed string, ``True`` for a valueless attribute such
    as ``disabled``, or ``None`` (reserved).
    """

    value: AttributeScalar
    position: Position

    @property
    def is_flag(self) -> bool:
        """Check if the attribute was written without ``=``."""
        return self.value is True

    def to_dict(self) -> Dict[str, object]:
        return {"value": self.value, "position": self.position.to_dict()}


Attributes = Dict[str, AttributeValue]


@dataclass
class Tag:
    """Transient description of one scanned tag."""

    name: Optional[str]
    position: Position
    attrs: Attributes = field(default_factory=dict)
    is_close: bool = False
    is_closed: bool = False
    is_comment: bool = False
    comment_text: Optional[str] = None


@dataclass
class ScanResult:
    """Scanned tag plus the warnings raised while reading its attributes."""

    tag: Tag
    warnings: List[ParseWarning] = field(default_factory=list)


def _scan_comment(document: str, start: int, offset: int) -> ScanResult:
    if document[offset:offset + len(COMMENT_OPEN)] != COMMENT_OPEN:
        raise MarkupSyntaxError(document, offset, "Malformed comment, expected '<!--'")

    body_start = offset + len(COMMENT_OPEN)
    close = document.find(COMMENT_CLOSE, body_start)
    if close < 0:
        raise MarkupSyntaxError(document, start, "Unterminated comment, missing '-->'")

    tag = Tag(
        name=None,
        position=Position(start, close + len(COMMENT_CLOSE)),
        is_closed=True,
        is_comment=True,
        comment_text=document[body_start:close],
    )
    return ScanResult(tag)


def _scan_value(
    document: str, key: str, value_start: int
) -> Tuple[AttributeScalar, int]:
    """Read an attribute value starting right after ``=``.

    Returns the trimmed value and the offset one past the last consumed
    character.
    """
    quote = char_at(document, value_start)
    if is_one_of(quote, QUOTES):
        close = document.find(quote, value_start + 1)
        if close < 0:
            raise MarkupSyntaxError(
                document, value_start, f"Unterminated quoted value for attribute '{key}'"
            )
        return document[value_start + 1:close].strip(), close + 1

    value_end = find_next(document, WHITE_SPACE_OR_TAG_END, value_start)
    return document[value_start:value_end].strip(), value_end


def scan_tag(document: str, offset: int) -> ScanResult:
    """Scan the tag whose ``<`` is at ``offset``.

    Args:
        document: Complete source text
        offset: Index of the opening ``<``

    Returns:
        ScanResult with the tag and any duplicate-attribute warnings

    Raises:
        MarkupSyntaxError: ``offset`` is not at ``<``, a comment is malformed
            or unterminated, or a quoted attribute value never closes
    """
    if char_at(document, offset) != "<":
        raise MarkupSyntaxError(document, offset, "Expected '<' at start of tag")

    start = offset
    offset += 1
    is_close = False
    marker = char_at(document, offset)
    if marker == "/":
        is_close = True
        offset += 1
    elif marker == "!":
        return _scan_comment(document, start, offset)

    sep = find_next(document, WHITE_SPACE_OR_TAG_END, offset)
    name = document[offset:sep]
    attrs: Attributes = {}
    warnings: List[ParseWarning] = []

    while is_one_of(char_at(document, sep), WHITE_SPACE):
        while is_one_of(char_at(document, sep), WHITE_SPACE):
            sep += 1
        if sep >= len(document) or is_one_of(char_at(document, sep), TAG_END):
            break

        key_start = sep
        key_end = find_next(document, WHITE_SPACE_OR_TAG_END + "=", sep + 1)
        key = document[key_start:key_end]
        if key in attrs:
            warnings.append(ParseWarning(
                kind=WarningKind.DUPLICATE_ATTRIBUTE,
                offset=key_end,
                message=f"Duplicate key: {key}",
                name=key,
                document=document,
            ))

        value: AttributeScalar
        if char_at(document, key_end) == "=":
            value, sep = _scan_value(document, key, key_end + 1)
        else:
            value, sep = True, key_end
        attrs[key] = AttributeValue(value, Position(key_start, sep))

    is_closed = False
    if char_at(document, sep) == "/":
        is_closed = True
        sep += 1

    # sep sits on the terminating '>' in well-formed input
    end = min(sep + 1, len(document))
    tag = Tag(
        name=name,
        position=Position(start, end),
        attrs=attrs,
        is_close=is_close,
        is_closed=is_closed,
    )
    return ScanResult(tag, warnings)
