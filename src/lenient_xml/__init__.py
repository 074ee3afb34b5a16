"""Lenient XML Parser.

A permissive markup tokenizer and tree builder. It turns XML/HTML-like text
into a tree of element, text and comment nodes, records source positions for
every tag and attribute, and reports malformed nesting and duplicate
attributes as warnings instead of failing.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_file(), walk()
- Level 2: Configured parser - LenientXMLParser class
"""

__version__ = "0.1.0"
__author__ = "Lenient XML Parser Team"

from .api import LenientXMLParser, parse, parse_file
from .shared.config import ParserConfig
from .shared.errors import LenientXMLError, MarkupSyntaxError
from .shared.result import ParseWarning, WarningKind
from .tree import (
    ParseResult,
    XMLComment,
    XMLElement,
    XMLText,
    iter_nodes,
    walk,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_file",
    "walk",
    "iter_nodes",

    # Level 2: Configured parser
    "LenientXMLParser",
    "ParserConfig",

    # Result objects and data structures
    "ParseResult",
    "ParseWarning",
    "WarningKind",
    "XMLComment",
    "XMLElement",
    "XMLText",

    # Exceptions
    "LenientXMLError",
    "MarkupSyntaxError",
]
