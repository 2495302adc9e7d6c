"""Conversion between character offsets and line/character positions."""

from locus.models import UNRESOLVED, Position


class PositionConverter:
    """Offset to position conversion over a fixed text, memoized per offset.

    The cache is never shared and never evicted; it lives as long as the
    converter. Instances are not thread-safe.
    """

    def __init__(self, content: str):
        self.content = content
        self._positions: dict[int, Position] = {}

    def to_position(self, offset: int) -> Position:
        """Convert a character offset into a zero-based position.

        Args:
            offset: Character index, len(content) included

        Returns:
            Position, or UNRESOLVED if offset is outside the content
        """
        position = self._positions.get(offset)
        if position is None:
            position = self._calculate_position(offset)
            self._positions[offset] = position
        return position

    def _calculate_position(self, offset: int) -> Position:
        if offset < 0 or offset > len(self.content):
            return UNRESOLVED
        line = self.content.count("\n", 0, offset)
        line_start = self.content.rfind("\n", 0, offset) + 1
        return Position(line=line, character=offset - line_start)

    @property
    def cache_size(self) -> int:
        return len(self._positions)

    @staticmethod
    def to_offset(content: str, position: Position) -> int:
        """Convert a position back into a character offset.

        The character is not checked against the length of its line.

        Returns:
            Offset, or -1 if content has fewer lines than position.line
        """
        if position.line == 0:
            return position.character
        current_line = 0
        for i, ch in enumerate(content):
            if ch == "\n":
                current_line += 1
                if current_line == position.line:
                    return i + 1 + position.character
        return -1
