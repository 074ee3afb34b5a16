"""Document tree node types.

The tree is a closed set of three node classes. Elements own their children;
there are no parent back-references, so traversal is always top-down.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from lenient_xml.shared.position import Position
from lenient_xml.tokenization.scanner import AttributeScalar, Attributes


class NodeType(Enum):
    """Kinds of nodes in the document tree."""

    ELEMENT = auto()
    TEXT = auto()
    COMMENT = auto()


@dataclass(eq=False)
class XMLText:
    """Trimmed, non-empty text run between tags."""

    value: str
    position: Optional[Position] = None

    @property
    def type(self) -> NodeType:
        return NodeType.TEXT

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "text", "value": self.value}
        if self.position is not None:
            result["position"] = self.position.to_dict()
        return result


@dataclass(eq=False)
class XMLComment:
    """``<!-- ... -->`` comment; ``value`` is the raw text between the delimiters."""

    value: str
    position: Optional[Position] = None

    @property
    def type(self) -> NodeType:
        return NodeType.COMMENT

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "comment", "value": self.value}
        if self.position is not None:
            result["position"] = self.position.to_dict()
        return result


@dataclass(eq=False)
class XMLElement:
    """Element node with attributes and ordered children.

    The synthetic document root is an element with ``name=None`` and no
    positions. ``pos_close`` stays ``None`` for elements that were never
    explicitly closed, including self-closing ones.
    """

    name: Optional[str] = None
    attrs: Attributes = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    pos_open: Optional[Position] = None
    pos_close: Optional[Position] = None
    self_closing: bool = False

    @property
    def type(self) -> NodeType:
        return NodeType.ELEMENT

    @property
    def is_root(self) -> bool:
        """Check if this is the synthetic document root."""
        return self.name is None and self.pos_open is None

    @property
    def is_closed(self) -> bool:
        """Check if the element was closed explicitly or by ``/>``."""
        return self.self_closing or self.pos_close is not None

    @property
    def text(self) -> str:
        """Direct text children joined with single spaces."""
        return " ".join(
            child.value for child in self.children if isinstance(child, XMLText)
        )

    @property
    def elements(self) -> List["XMLElement"]:
        """Direct element children."""
        return [child for child in self.children if isinstance(child, XMLElement)]

    def get_attribute(
        self, name: str, default: AttributeScalar = None
    ) -> AttributeScalar:
        """Get attribute value with optional default."""
        attr = self.attrs.get(name)
        if attr is None:
            return default
        return attr.value

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attrs

    def find(self, name: str) -> Optional["XMLElement"]:
        """Find first descendant element with matching name, in document order."""
        for node in iter_nodes(self):
            if node is not self and isinstance(node, XMLElement) and node.name == name:
                return node
        return None

    def find_all(self, name: str) -> List["XMLElement"]:
        """Find all descendant elements with matching name, in document order."""
        return [
            node for node in iter_nodes(self)
            if node is not self and isinstance(node, XMLElement) and node.name == name
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {"type": "element"}
        if self.name is not None:
            result["name"] = self.name
        if self.attrs:
            result["attrs"] = {key: attr.to_dict() for key, attr in self.attrs.items()}
        if self.pos_open is not None:
            result["pos_open"] = self.pos_open.to_dict()
        if self.pos_close is not None:
            result["pos_close"] = self.pos_close.to_dict()
        result["children"] = [child.to_dict() for child in self.children]
        return result


Node = Union[XMLElement, XMLText, XMLComment]


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants in pre-order, children in document order."""
    # iterative: nesting depth is unbounded
    pending: List[Node] = [node]
    while pending:
        current = pending.pop()
        yield current
        if isinstance(current, XMLElement):
            pending.extend(reversed(current.children))


def walk(node: Node, visit: Callable[[Node], None]) -> None:
    """Call ``visit`` on ``node`` and then on each descendant, parent first."""
    for current in iter_nodes(node):
        visit(current)
