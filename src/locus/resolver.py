"""Ranges and locations for syntax nodes of one compilation unit."""

from pathlib import Path

from locus.document import SourceDocument
from locus.locator import BoundingBoxLocator
from locus.models import Location, Range, SourceSpan, Span
from locus.positions import PositionConverter
from locus.syntax import ClassNode, MemberSelectNode, MethodNode, Node, SourcePositions, VariableNode


class RangeResolver:
    """Turns node offsets into editor ranges for a single document.

    Owns the document and its position cache. Not thread-safe: confine an
    instance to one worker.
    """

    def __init__(self, positions: SourcePositions, document: SourceDocument):
        self.positions = positions
        self.document = document
        self.converter = PositionConverter(document.content)
        self.locator = BoundingBoxLocator(document.content, positions)

    @classmethod
    def for_file(
        cls,
        positions: SourcePositions,
        path: Path,
        encoding: str = "utf-8"
    ) -> "RangeResolver":
        """Create a resolver reading the file at path once.

        Raises:
            DocumentLoadError: If the file cannot be read
        """
        return cls(positions, SourceDocument.from_path(path, encoding))

    @property
    def uri(self) -> str:
        return self.document.uri

    def range(self, node: Node) -> Range:
        """Range covering the whole node; an unknown end collapses onto the start."""
        start, end = self._offsets(node)
        return Range(
            start=self.converter.to_position(start),
            end=self.converter.to_position(end),
        )

    def location(self, node: Node, name: str | None = None) -> Location:
        """Location of a node's identifier, or of the whole node for other variants.

        Args:
            node: Syntax node to locate
            name: Identifier to search for instead of the method's own name.
                Only valid for method nodes.

        Raises:
            TypeError: If name is given for a node that is not a method
        """
        if name is not None and not isinstance(node, MethodNode):
            raise TypeError(f"An override name is only supported for methods, not {node.kind}")

        match node:
            case ClassNode():
                range_ = self._span_range(self.locator.for_class(node))
            case MethodNode():
                range_ = self._span_range(self.locator.for_method(node, name))
            case VariableNode():
                range_ = self._span_range(self.locator.for_variable(node))
            case MemberSelectNode():
                range_ = self._span_range(self.locator.for_member_select(node))
            case _:
                range_ = self.range(node)

        return Location(uri=self.document.uri, range=range_)

    def source_span(self, node: Node) -> SourceSpan:
        start, end = self._offsets(node)
        return SourceSpan(file_name=self.document.file_name, start_offset=start, end_offset=end)

    def _offsets(self, node: Node) -> tuple[int, int]:
        start = self.positions.start_position(node)
        end = self.positions.end_position(node)
        if end < 0:
            end = start
        return start, end

    def _span_range(self, span: Span) -> Range:
        return Range(
            start=self.converter.to_position(span.start),
            end=self.converter.to_position(span.end),
        )
