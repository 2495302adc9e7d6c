from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from locus.document import SourceDocument
from locus.elements import Element, ElementId, ElementTable
from locus.resolver import RangeResolver
from locus.syntax import Node, PositionTable


@dataclass
class Declaration:
    """A declaration-shaped syntax node paired with its element."""
    node: Node
    element_id: ElementId


@dataclass
class ParsedUnit:
    """Everything a raw parse of one compilation unit produces."""
    document: SourceDocument
    positions: PositionTable = field(default_factory=PositionTable)
    elements: ElementTable = field(default_factory=ElementTable)
    nodes: list[Node] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)

    def element(self, declaration: Declaration) -> Element:
        return self.elements[declaration.element_id]

    def resolver(self) -> RangeResolver:
        """A resolver over this unit's document and position table."""
        return RangeResolver(self.positions, self.document)


class BaseParser(ABC):
    """Abstract base class for language-specific raw parsers."""

    @abstractmethod
    def parse(self, source_code: str, file_path: str) -> ParsedUnit:
        """Parse one compilation unit into syntax nodes, positions and elements.

        Args:
            source_code: The source code to parse
            file_path: Path to the file (for the document URI)

        Returns:
            ParsedUnit for the source code
        """
        pass
