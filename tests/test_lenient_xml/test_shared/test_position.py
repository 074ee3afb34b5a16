"""Tests for position tracking and character helpers."""

import pytest

from lenient_xml.shared.position import (
    Position,
    char_at,
    find_next,
    is_one_of,
    line_and_column,
)


class TestPosition:
    """Test the half-open span type."""

    def test_valid_position(self) -> None:
        """Test span attributes and slicing."""
        position = Position(2, 5)

        assert position.length == 3
        assert position.slice("abcdefg") == "cde"
        assert position.to_dict() == {"start": 2, "end": 5}

    def test_empty_span_is_allowed(self) -> None:
        """Test start == end is a valid empty span."""
        assert Position(4, 4).length == 0

    def test_end_before_start_raises_error(self) -> None:
        """Test inverted spans are rejected."""
        with pytest.raises(ValueError, match="Position end must be >= start"):
            Position(5, 2)

    def test_negative_start_raises_error(self) -> None:
        """Test negative offsets are rejected."""
        with pytest.raises(ValueError, match="Position start must be >= 0"):
            Position(-1, 0)

    def test_positions_are_hashable_values(self) -> None:
        """Test equal spans compare and hash equal."""
        assert Position(1, 2) == Position(1, 2)
        assert len({Position(1, 2), Position(1, 2)}) == 1


class TestCharacterHelpers:
    """Test low-level character lookups."""

    def test_char_at_in_and_out_of_range(self) -> None:
        """Test char_at returns an empty string past the end."""
        assert char_at("ab", 1) == "b"
        assert char_at("ab", 2) == ""
        assert char_at("ab", -1) == ""

    def test_is_one_of_excludes_end_of_input(self) -> None:
        """Test the empty string never counts as a member."""
        assert is_one_of(" ", " \t")
        assert not is_one_of("x", " \t")
        assert not is_one_of("", " \t")

    def test_find_next(self) -> None:
        """Test searching for any of several characters."""
        assert find_next("ab cd>", " >") == 2
        assert find_next("ab cd>", " >", 3) == 5
        assert find_next("abc", "<") == 3
        assert find_next("abc", "<", 10) == 3


class TestLineAndColumn:
    """Test offset to line/column conversion."""

    @pytest.mark.parametrize("offset, expected", [
        (0, (1, 1)),
        (2, (1, 3)),
        (3, (2, 1)),
        (5, (2, 3)),
        (99, (2, 3)),
    ])
    def test_line_and_column(self, offset: int, expected: tuple) -> None:
        """Test 1-based line and column for several offsets."""
        assert line_and_column("ab\ncd", offset) == expected
