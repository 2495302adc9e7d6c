"""Locate the identifier of a declaration inside its reported span.

Position tables usually report a declaration starting at its first modifier
or annotation, not at its name. The locator picks an anchor offset just past
the syntax that precedes the name (modifiers, return type, declared type or
qualifier) and searches forward for the literal name from there.

The search is textual: if the same name occurs between the anchor and the
real identifier (a trailing comment, a sibling declarator), the first
occurrence is returned.
"""

import logging

from locus.models import NOPOS, Span
from locus.syntax import ClassNode, MemberSelectNode, MethodNode, Node, SourcePositions, VariableNode

logger = logging.getLogger(__name__)


class BoundingBoxLocator:
    """Finds identifier spans by anchored text search over a document."""

    def __init__(self, content: str, positions: SourcePositions):
        self.content = content
        self.positions = positions

    def for_class(self, node: ClassNode) -> Span:
        # Modifiers may mention the class name (self-annotated classes), so the
        # search must start after them.
        anchor = NOPOS
        if node.modifiers is not None:
            anchor = self.positions.end_position(node.modifiers)
        if anchor == NOPOS:
            anchor = self.positions.start_position(node)
        return self._search(node.name, anchor)

    def for_method(self, node: MethodNode, name: str | None = None) -> Span:
        """Locate a method name, or name if given (e.g. a constructor's class name)."""
        if name is None:
            name = node.name
        if node.return_type is not None:
            anchor = self._end_or_parent_start(node.return_type, node)
        elif node.modifiers is not None:
            anchor = self._end_or_parent_start(node.modifiers, node)
        else:
            anchor = self.positions.start_position(node)
        return self._search(name, anchor)

    def for_variable(self, node: VariableNode) -> Span:
        if node.type is None:
            anchor = self.positions.start_position(node)
        else:
            anchor = self._end_or_parent_start(node.type, node)
        return self._search(node.name, anchor)

    def for_member_select(self, node: MemberSelectNode) -> Span:
        if node.expression is None:
            anchor = self.positions.start_position(node)
        else:
            anchor = self._end_or_parent_start(node.expression, node)
        return self._search(node.identifier, anchor)

    def _end_or_parent_start(self, node: Node, parent: Node) -> int:
        """End offset of node, or start offset of parent if the former is unknown."""
        end = self.positions.end_position(node)
        if end != NOPOS:
            return end
        logger.debug(f"No end offset for {node.kind}, anchoring at start of {parent.kind}")
        return self.positions.start_position(parent)

    def _search(self, name: str, anchor: int) -> Span:
        start = self.content.find(name, max(anchor, 0))
        if start == -1 or not name:
            logger.debug(f"Identifier {name!r} not found after offset {anchor}")
            return Span(NOPOS, NOPOS)
        return Span(start, start + len(name))
