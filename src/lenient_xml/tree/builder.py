"""Tree building for lenient XML parsing.

``XMLTreeBuilder`` walks a document tag by tag, keeping an explicit stack of
open elements. Malformed nesting is repaired by popping the stack and is
reported through warnings; only scanner faults abort a parse.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from lenient_xml.shared import (
    InputTooLargeError,
    MarkupSyntaxError,
    ParserConfig,
    ParseWarning,
    PerformanceMetrics,
    WarningKind,
    get_logger,
)
from lenient_xml.shared.position import Position, find_next
from lenient_xml.tokenization import Tag, scan_tag

from .nodes import Node, XMLComment, XMLElement, XMLText, iter_nodes


@dataclass
class ParseResult:
    """Finished tree plus the warnings collected while building it.

    Unpacks as ``(root, warnings)``:

        >>> root, warnings = parse_xml("<a><b></a>")
        >>> [w.message for w in warnings]
        ['Unclosed tag: b']
    """

    root: XMLElement = field(default_factory=XMLElement)
    warnings: List[ParseWarning] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    def __iter__(self) -> Iterator[Union[XMLElement, List[ParseWarning]]]:
        yield self.root
        yield self.warnings

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def is_well_formed(self) -> bool:
        """Check if the document parsed without any recovery."""
        return not self.warnings

    @property
    def element_count(self) -> int:
        """Number of elements in the tree, excluding the synthetic root."""
        return sum(
            1 for node in iter_nodes(self.root)
            if isinstance(node, XMLElement) and node is not self.root
        )

    def get_warnings_by_kind(self, kind: WarningKind) -> List[ParseWarning]:
        """Get warnings of a specific kind, in detection order."""
        return [warning for warning in self.warnings if warning.kind == kind]

    def summary(self) -> Dict[str, Any]:
        """Compact overview for reporting."""
        counts: Dict[str, int] = {}
        for warning in self.warnings:
            counts[warning.kind.name] = counts.get(warning.kind.name, 0) + 1
        return {
            "well_formed": self.is_well_formed,
            "element_count": self.element_count,
            "warning_count": len(self.warnings),
            "warnings_by_kind": counts,
            "processing_time_ms": self.performance.processing_time_ms,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "warnings": [warning.to_dict() for warning in self.warnings],
            "performance": self.performance.to_dict(),
        }


class XMLTreeBuilder:
    """Builds a document tree from raw markup text.

    The builder holds configuration only; every ``build`` call keeps its own
    stack and warning list, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize tree builder.

        Args:
            config: Parser configuration (defaults to lenient)
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_tree_builder")

    def build(self, document: str) -> ParseResult:
        """Parse ``document`` into a tree.

        Returns:
            ParseResult with the root element and ordered warnings

        Raises:
            MarkupSyntaxError: Unscannable markup, or a mismatched close tag
                when ``strict_close_tags`` is enabled
            InputTooLargeError: Document longer than ``max_input_size``
        """
        if not isinstance(document, str):
            raise TypeError(f"Document must be str, not {type(document).__name__}")
        limit = self.config.max_input_size
        if limit is not None and len(document) > limit:
            raise InputTooLargeError(len(document), limit)

        start_time = time.time()
        self.logger.info(
            "Starting tree building",
            extra={
                "characters": len(document),
                "strict_close_tags": self.config.strict_close_tags,
            }
        )

        result = ParseResult(correlation_id=self.correlation_id)
        metrics = result.performance
        stack: List[XMLElement] = [result.root]
        length = len(document)
        offset = 0

        while offset < length:
            tag_start = find_next(document, "<", offset)
            if self._append_text(stack[-1], document, offset, tag_start):
                metrics.nodes_created += 1
            if tag_start >= length:
                break

            scan = scan_tag(document, tag_start)
            metrics.tags_scanned += 1
            for warning in scan.warnings:
                self._warn(result, warning)

            tag = scan.tag
            if tag.is_close:
                self._close_element(stack, tag, document, result)
            else:
                self._open_node(stack, tag)
                metrics.nodes_created += 1
                metrics.max_depth = max(metrics.max_depth, len(stack) - 1)
            offset = tag.position.end

        if len(stack) > 1:
            innermost = stack[-1]
            self._warn(result, ParseWarning(
                kind=WarningKind.UNCLOSED_TAG,
                offset=length,
                message=f"Unclosed tag: {innermost.name}",
                name=innermost.name,
                document=document,
            ))

        metrics.characters_processed = length
        metrics.processing_time_ms = (time.time() - start_time) * 1000

        self.logger.info(
            "Tree building completed",
            extra={
                "tags_scanned": metrics.tags_scanned,
                "warning_count": len(result.warnings),
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        return result

    def _warn(self, result: ParseResult, warning: ParseWarning) -> None:
        self.logger.debug(
            warning.message,
            extra={"warning_kind": warning.kind.name, "offset": warning.offset}
        )
        result.warnings.append(warning)

    @staticmethod
    def _append_text(
        parent: XMLElement, document: str, start: int, end: int
    ) -> bool:
        """Append the trimmed text run ``document[start:end]`` to ``parent``.

        Returns True if a text node was created.
        """
        raw = document[start:end]
        value = raw.strip()
        if not value:
            return False
        text_start = start + len(raw) - len(raw.lstrip())
        parent.children.append(
            XMLText(value, Position(text_start, text_start + len(value)))
        )
        return True

    @staticmethod
    def _open_node(stack: List[XMLElement], tag: Tag) -> None:
        """Attach an open, self-closing or comment tag to the current element."""
        node: Node
        if tag.is_comment:
            node = XMLComment(tag.comment_text or "", tag.position)
        else:
            node = XMLElement(
                name=tag.name,
                attrs=tag.attrs,
                pos_open=tag.position,
                self_closing=tag.is_closed,
            )
        stack[-1].children.append(node)
        if isinstance(node, XMLElement) and not tag.is_closed:
            stack.append(node)

    def _close_element(
        self,
        stack: List[XMLElement],
        tag: Tag,
        document: str,
        result: ParseResult
    ) -> None:
        """Resolve a close tag against the open-element stack."""
        if self.config.strict_close_tags:
            self._close_element_strict(stack, tag, document)
            return

        match_index = None
        # index 0 is the root, which never matches a named close tag
        for index in range(len(stack) - 1, 0, -1):
            if stack[index].name == tag.name:
                match_index = index
                break

        if match_index is None:
            self._warn(result, ParseWarning(
                kind=WarningKind.UNMATCHED_TAG,
                offset=tag.position.start,
                message=f"Unmatched tag: {tag.name}",
                name=tag.name,
                document=document,
            ))
            return

        # match_index >= 1: the root is never popped here
        while len(stack) - 1 > match_index:
            unclosed = stack.pop()
            self._warn(result, ParseWarning(
                kind=WarningKind.UNCLOSED_TAG,
                offset=unclosed.pos_open.start,  # type: ignore[union-attr]
                message=f"Unclosed tag: {unclosed.name}",
                name=unclosed.name,
                document=document,
            ))

        matched = stack.pop()
        matched.pos_close = tag.position

    @staticmethod
    def _close_element_strict(
        stack: List[XMLElement], tag: Tag, document: str
    ) -> None:
        current = stack[-1]
        if len(stack) == 1:
            raise MarkupSyntaxError(
                document, tag.position.start, f"Unmatched close tag </{tag.name}>"
            )
        if current.name != tag.name:
            raise MarkupSyntaxError(
                document,
                tag.position.start,
                f"Mismatched close tag </{tag.name}>, expected </{current.name}>",
            )
        current.pos_close = tag.position
        stack.pop()


def parse_xml(
    document: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse ``document`` with a one-off ``XMLTreeBuilder``."""
    return XMLTreeBuilder(config, correlation_id).build(document)
