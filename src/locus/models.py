from dataclasses import dataclass

NOPOS = -1  # Offset the upstream model could not report


@dataclass(frozen=True)
class Span:
    """Character offsets into a document, either end may be NOPOS."""
    start: int
    end: int

    def __post_init__(self):
        if self.start != NOPOS and self.end != NOPOS and self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    @property
    def is_known(self) -> bool:
        return self.start != NOPOS and self.end != NOPOS


@dataclass(frozen=True)
class Position:
    """A zero-based line/character position in a document."""
    line: int
    character: int

    @property
    def is_resolved(self) -> bool:
        return self.line >= 0 and self.character >= 0


UNRESOLVED = Position(line=-1, character=-1)


@dataclass(frozen=True)
class Range:
    """A pair of positions (start inclusive, end exclusive)."""
    start: Position
    end: Position

    @property
    def is_resolved(self) -> bool:
        return self.start.is_resolved and self.end.is_resolved


@dataclass(frozen=True)
class Location:
    """A range inside the document identified by uri."""
    uri: str
    range: Range


@dataclass(frozen=True)
class SourceSpan:
    """Raw offsets of a syntax node within a named source file."""
    file_name: str
    start_offset: int
    end_offset: int
