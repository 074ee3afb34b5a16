"""Public API for lenient XML parsing.

Level 1: ``parse`` and ``parse_file`` functions
Level 2: ``LenientXMLParser`` for configured, repeated parsing
Adapters: ``to_lxml`` / ``LxmlAdapter`` for handing trees to lxml
"""

from .adapters import ConversionResult, LxmlAdapter, to_lxml
from .parser import LenientXMLParser, parse, parse_file

__all__ = [
    "ConversionResult",
    "LenientXMLParser",
    "LxmlAdapter",
    "parse",
    "parse_file",
    "to_lxml",
]
