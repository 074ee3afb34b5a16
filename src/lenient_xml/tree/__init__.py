"""Tree building for lenient XML parsing.

Key Components:
    XMLTreeBuilder: Builds a document tree from markup text
    XMLElement, XMLText, XMLComment: Node types of the finished tree
    ParseResult: Root element, warnings and metrics of one parse
    walk / iter_nodes: Pre-order traversal helpers
"""

from .builder import ParseResult, XMLTreeBuilder, parse_xml
from .nodes import (
    Node,
    NodeType,
    XMLComment,
    XMLElement,
    XMLText,
    iter_nodes,
    walk,
)

__all__ = [
    "Node",
    "NodeType",
    "ParseResult",
    "XMLComment",
    "XMLElement",
    "XMLText",
    "XMLTreeBuilder",
    "iter_nodes",
    "parse_xml",
    "walk",
]
