"""Tag scanning for lenient XML parsing.

Key Components:
    scan_tag: Reads one ``<...>`` construct from a known offset
    Tag: Transient scanned tag with name, attributes and closing status
    AttributeValue: Attribute value with its source position
    ScanResult: Tag plus attribute-level warnings
"""

from .scanner import (
    AttributeValue,
    Attributes,
    ScanResult,
    Tag,
    scan_tag,
)

__all__ = [
    "AttributeValue",
    "Attributes",
    "ScanResult",
    "Tag",
    "scan_tag",
]
