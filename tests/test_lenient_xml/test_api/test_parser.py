"""Tests for the public parsing API."""

import logging
from pathlib import Path

import pytest

from lenient_xml import (
    LenientXMLParser,
    MarkupSyntaxError,
    ParserConfig,
    WarningKind,
    parse,
    parse_file,
)
from lenient_xml.shared import InputTooLargeError


class TestParseFunction:
    """Test module-level parse()."""

    def test_duplicate_attribute_last_wins(self) -> None:
        """Test the later duplicate overwrites the earlier value."""
        root, warnings = parse('<a x="1" x="2"><b/></a>')

        assert root.children[0].get_attribute("x") == "2"
        assert [w.message for w in warnings] == ["Duplicate key: x"]

    def test_result_carries_correlation_id(self) -> None:
        """Test the correlation ID is propagated to the result."""
        result = parse("<a/>", correlation_id="req-1")

        assert result.correlation_id == "req-1"
        assert result.is_well_formed

    def test_strict_config_is_honored(self) -> None:
        """Test config reaches the tree builder."""
        with pytest.raises(MarkupSyntaxError, match="Mismatched close tag"):
            parse("<a><b></a>", ParserConfig.strict())

    def test_fault_is_logged_and_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test scanner faults are logged with their offset before propagating."""
        with caplog.at_level(logging.WARNING, logger="lenient_xml.api.parser"):
            with pytest.raises(MarkupSyntaxError) as exc_info:
                parse("<a x='1>")

        assert exc_info.value.offset == 5
        record = caplog.records[-1]
        assert record.getMessage() == "Parse aborted by markup fault"
        assert record.offset == 5
        assert record.preview == "'1>"


class TestParseFile:
    """Test parse_file()."""

    def test_parse_file(self, tmp_path: Path) -> None:
        """Test reading and parsing a file."""
        path = tmp_path / "doc.xml"
        path.write_text("<note><to>Tove</to></note>", encoding="utf-8")

        root, warnings = parse_file(path)

        assert warnings == []
        assert root.find("to").text == "Tove"

    def test_parse_file_with_encoding(self, tmp_path: Path) -> None:
        """Test non-default encodings are decoded before parsing."""
        path = tmp_path / "latin.xml"
        path.write_bytes("<p>caf\xe9</p>".encode("latin-1"))

        root, _ = parse_file(str(path), encoding="latin-1")

        assert root.children[0].text == "caf\xe9"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test read errors propagate."""
        with pytest.raises(OSError):
            parse_file(tmp_path / "missing.xml")


class TestLenientXMLParser:
    """Test the configured parser class."""

    def test_statistics_accumulate(self) -> None:
        """Test counters track successful and failed parses."""
        parser = LenientXMLParser()

        parser.parse("<a><b></a>")
        parser.parse("<a/>")
        with pytest.raises(MarkupSyntaxError):
            parser.parse("<!-- open")

        stats = parser.statistics
        assert stats["parse_count"] == 3
        assert stats["failed_parses"] == 1
        assert stats["warning_count"] == 1
        assert stats["total_processing_time_ms"] >= 0.0

    def test_input_limit_counts_as_failure(self) -> None:
        """Test oversized input raises and is counted."""
        parser = LenientXMLParser(ParserConfig(max_input_size=4))

        with pytest.raises(InputTooLargeError):
            parser.parse("<a></a>")

        assert parser.statistics["failed_parses"] == 1

    def test_reset_statistics(self) -> None:
        """Test counters return to zero."""
        parser = LenientXMLParser()
        parser.parse("<a/>")

        parser.reset_statistics()

        assert parser.statistics == {
            "parse_count": 0,
            "failed_parses": 0,
            "warning_count": 0,
            "total_processing_time_ms": 0.0,
        }

    def test_parser_is_reusable(self) -> None:
        """Test state does not leak between parses."""
        parser = LenientXMLParser()

        first = parser.parse("<a><b>")
        second = parser.parse("<c></c>")

        assert len(first.get_warnings_by_kind(WarningKind.UNCLOSED_TAG)) == 1
        assert second.warnings == []
        assert [e.name for e in second.root.elements] == ["c"]

    def test_parse_file_method(self, tmp_path: Path) -> None:
        """Test the instance file helper uses the instance config."""
        path = tmp_path / "doc.xml"
        path.write_text("<a></b></a>", encoding="utf-8")

        with pytest.raises(MarkupSyntaxError, match="Mismatched close tag </b>, expected </a>"):
            LenientXMLParser(ParserConfig.strict()).parse_file(path)
