"""Integration adapter for converting parsed trees into lxml elements.

lxml is an optional dependency (``pip install lenient-xml[lxml]``); the
adapter reports itself unavailable when it is not installed.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from lenient_xml.shared import get_logger
from lenient_xml.tree import ParseResult, XMLComment, XMLElement, XMLText

DEFAULT_ROOT_TAG = "document"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class LxmlAdapter:
    """Converts ``XMLElement`` trees to ``lxml.etree`` elements.

    The synthetic root becomes an element named ``root_tag``. Text runs are
    placed in ``.text`` or the preceding sibling's ``.tail``; valueless
    attributes are written as ``key="key"``. Attributes whose names lxml
    rejects are skipped with a warning.
    """

    def __init__(
        self,
        root_tag: str = DEFAULT_ROOT_TAG,
        correlation_id: Optional[str] = None
    ) -> None:
        self.root_tag = root_tag
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def to_target(self, source: Union[ParseResult, XMLElement]) -> ConversionResult:
        """Convert a parse result or element to an ``lxml.etree`` element."""
        start_time = time.time()
        root = source.root if isinstance(source, ParseResult) else source

        if not self.is_available():
            return ConversionResult(
                success=False,
                converted_data=None,
                conversion_time_ms=0.0,
                errors=["lxml is not installed"],
            )

        import lxml.etree as ET

        warnings: List[str] = []
        try:
            converted = self._convert_element(root, ET, warnings)
        except ValueError as e:
            self.logger.warning("lxml conversion failed", extra={"reason": str(e)})
            return ConversionResult(
                success=False,
                converted_data=None,
                conversion_time_ms=(time.time() - start_time) * 1000,
                warnings=warnings,
                errors=[f"Failed to convert to lxml: {e}"],
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            conversion_time_ms=(time.time() - start_time) * 1000,
            warnings=warnings,
            metadata={"lxml_version": ET.LXML_VERSION},
        )

    def _convert_element(self, element: XMLElement, ET: Any, warnings: List[str]) -> Any:
        tag = self.root_tag if element.name is None else element.name
        lxml_element = ET.Element(tag)

        for key, attr in element.attrs.items():
            value = key if attr.value is True else (attr.value or "")
            try:
                lxml_element.set(key, value)
            except ValueError:
                warnings.append(f"Skipped attribute {key!r} on <{tag}>")

        last_child = None
        for child in element.children:
            if isinstance(child, XMLText):
                if last_child is None:
                    lxml_element.text = _join(lxml_element.text, child.value)
                else:
                    last_child.tail = _join(last_child.tail, child.value)
                continue
            if isinstance(child, XMLComment):
                try:
                    last_child = ET.Comment(child.value)
                except ValueError:
                    warnings.append(f"Skipped comment inside <{tag}>")
                    continue
            else:
                last_child = self._convert_element(child, ET, warnings)
            lxml_element.append(last_child)

        return lxml_element


def _join(existing: Optional[str], value: str) -> str:
    return value if not existing else f"{existing} {value}"


def to_lxml(source: Union[ParseResult, XMLElement], root_tag: str = DEFAULT_ROOT_TAG) -> Any:
    """Convert a tree to ``lxml.etree``, raising on failure.

    Raises:
        ImportError: lxml is not installed
        ValueError: An element name is not a valid lxml tag
    """
    adapter = LxmlAdapter(root_tag)
    if not adapter.is_available():
        raise ImportError("lxml is required for to_lxml(); install lenient-xml[lxml]")
    result = adapter.to_target(source)
    if not result.success:
        raise ValueError("; ".join(result.errors))
    return result.converted_data
