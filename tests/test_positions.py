"""Tests for offset <-> position conversion."""

from locus.models import UNRESOLVED, Position
from locus.positions import PositionConverter

CONTENT = "ab\ncd\n\nef"


class TestToPosition:
    """Tests for PositionConverter.to_position."""

    def test_first_line(self):
        converter = PositionConverter(CONTENT)
        assert converter.to_position(0) == Position(line=0, character=0)
        assert converter.to_position(2) == Position(line=0, character=2)

    def test_after_newlines(self):
        converter = PositionConverter(CONTENT)
        assert converter.to_position(3) == Position(line=1, character=0)
        assert converter.to_position(5) == Position(line=1, character=2)
        assert converter.to_position(6) == Position(line=2, character=0)
        assert converter.to_position(7) == Position(line=3, character=0)

    def test_end_of_buffer_is_valid(self):
        converter = PositionConverter("abc")
        position = converter.to_position(3)
        assert position == Position(line=0, character=3)
        assert position.is_resolved

    def test_end_of_buffer_after_trailing_newline(self):
        converter = PositionConverter("abc\n")
        assert converter.to_position(4) == Position(line=1, character=0)

    def test_negative_offset_is_unresolved(self):
        converter = PositionConverter(CONTENT)
        assert converter.to_position(-1) == UNRESOLVED

    def test_offset_past_end_is_unresolved(self):
        converter = PositionConverter(CONTENT)
        assert converter.to_position(len(CONTENT) + 1) == UNRESOLVED

    def test_empty_content(self):
        converter = PositionConverter("")
        assert converter.to_position(0) == Position(line=0, character=0)
        assert converter.to_position(1) == UNRESOLVED

    def test_results_are_memoized(self):
        converter = PositionConverter(CONTENT)
        first = converter.to_position(5)
        second = converter.to_position(5)

        assert first is second
        assert converter.cache_size == 1

    def test_sentinels_are_memoized_too(self):
        converter = PositionConverter(CONTENT)
        converter.to_position(-1)
        converter.to_position(100)
        assert converter.cache_size == 2

    def test_caches_are_not_shared(self):
        first = PositionConverter(CONTENT)
        second = PositionConverter("x\ny")
        first.to_position(3)

        assert second.cache_size == 0
        assert second.to_position(3) == Position(line=1, character=1)


class TestToOffset:
    """Tests for PositionConverter.to_offset."""

    def test_first_line_returns_character(self):
        assert PositionConverter.to_offset(CONTENT, Position(line=0, character=1)) == 1

    def test_later_lines(self):
        assert PositionConverter.to_offset(CONTENT, Position(line=1, character=1)) == 4
        assert PositionConverter.to_offset(CONTENT, Position(line=3, character=2)) == 9

    def test_too_few_lines_returns_minus_one(self):
        assert PositionConverter.to_offset("a\nb", Position(line=5, character=0)) == -1

    def test_round_trip_for_every_offset(self):
        for content in (CONTENT, "", "abc", "abc\n", "\n\n", "x\r\ny\n\tz"):
            converter = PositionConverter(content)
            for offset in range(len(content) + 1):
                position = converter.to_position(offset)
                assert PositionConverter.to_offset(content, position) == offset
