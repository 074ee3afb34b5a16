"""Public parsing API for lenient XML parsing.

Simple module-level functions cover one-off parsing; ``LenientXMLParser``
holds a configuration for repeated use and keeps per-instance statistics.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from lenient_xml.shared import (
    LenientXMLError,
    MarkupSyntaxError,
    ParserConfig,
    get_logger,
)
from lenient_xml.tree import ParseResult, XMLTreeBuilder

PathLike = Union[str, Path]

PREVIEW_LENGTH = 100  # Max length for content preview in logs


def parse(
    document: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse markup text into a tree.

    Args:
        document: Markup text
        config: Parser configuration (defaults to lenient)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult that unpacks as ``(root, warnings)``

    Raises:
        MarkupSyntaxError: Unscannable markup; no partial tree is returned

    Examples:
        >>> root, warnings = parse('<a x="1" x="2"><b/></a>')
        >>> root.children[0].get_attribute("x")
        '2'
        >>> [w.message for w in warnings]
        ['Duplicate key: x']
    """
    logger = get_logger(__name__, correlation_id, "parse")
    try:
        return XMLTreeBuilder(config, correlation_id).build(document)
    except MarkupSyntaxError as e:
        logger.warning(
            "Parse aborted by markup fault",
            extra={
                "offset": e.offset,
                "fault": e.message,
                "preview": document[e.offset:e.offset + PREVIEW_LENGTH],
            }
        )
        raise


def parse_file(
    path: PathLike,
    encoding: str = "utf-8",
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Read a text file and parse its contents.

    Raises:
        OSError: The file cannot be read
        UnicodeDecodeError: The file is not valid in ``encoding``
        MarkupSyntaxError: Unscannable markup
    """
    file_path = Path(path)
    logger = get_logger(__name__, correlation_id, "parse_file")
    logger.info("Reading document", extra={"path": str(file_path), "encoding": encoding})
    document = file_path.read_text(encoding=encoding)
    return parse(document, config, correlation_id)


class LenientXMLParser:
    """Configured parser for repeated use.

    Examples:
        >>> parser = LenientXMLParser(ParserConfig.strict())
        >>> root, warnings = parser.parse("<a><b/></a>")
        >>> parser.statistics["parse_count"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "lenient_xml_parser")
        self._builder = XMLTreeBuilder(self.config, correlation_id)

        self._parse_count = 0
        self._failed_parses = 0
        self._warning_count = 0
        self._total_processing_time = 0.0

    def parse(self, document: str) -> ParseResult:
        """Parse markup text with this parser's configuration."""
        self._parse_count += 1
        try:
            result = self._builder.build(document)
        except LenientXMLError:
            self._failed_parses += 1
            raise
        self._warning_count += len(result.warnings)
        self._total_processing_time += result.performance.processing_time_ms
        return result

    def parse_file(self, path: PathLike, encoding: str = "utf-8") -> ParseResult:
        """Read a text file and parse it with this parser's configuration."""
        return self.parse(Path(path).read_text(encoding=encoding))

    @property
    def statistics(self) -> Dict[str, Any]:
        """Counters accumulated across this instance's parses."""
        return {
            "parse_count": self._parse_count,
            "failed_parses": self._failed_parses,
            "warning_count": self._warning_count,
            "total_processing_time_ms": self._total_processing_time,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._failed_parses = 0
        self._warning_count = 0
        self._total_processing_time = 0.0
