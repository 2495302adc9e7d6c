"""Syntax-node variants and the source-position table.

Nodes are produced by an upstream parser. They carry names and child links
but no offsets: offsets live in a separate position table, the way compiler
front ends report them. Any end offset may be unknown (NOPOS).
"""

from dataclasses import dataclass, field
from typing import Protocol

from locus.models import NOPOS, Span


@dataclass(eq=False)
class Node:
    """Any syntax node without a dedicated variant."""
    kind: str = "node"


@dataclass(eq=False)
class ModifiersNode(Node):
    """Modifier keywords and annotations in front of a declaration."""
    kind: str = "modifiers"
    flags: tuple[str, ...] = ()


@dataclass(eq=False)
class TypeNode(Node):
    """A type as written in source."""
    kind: str = "type"
    text: str = ""


@dataclass(eq=False)
class ClassNode(Node):
    kind: str = "class"
    name: str = ""
    modifiers: ModifiersNode | None = None
    members: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class MethodNode(Node):
    """A method or constructor; constructors have no return type."""
    kind: str = "method"
    name: str = ""
    modifiers: ModifiersNode | None = None
    return_type: Node | None = None
    parameters: list["VariableNode"] = field(default_factory=list)


@dataclass(eq=False)
class VariableNode(Node):
    kind: str = "variable"
    name: str = ""
    modifiers: ModifiersNode | None = None
    type: Node | None = None


@dataclass(eq=False)
class MemberSelectNode(Node):
    """Qualified access such as ``expression.identifier``."""
    kind: str = "member_select"
    identifier: str = ""
    expression: Node | None = None


class SourcePositions(Protocol):
    """Offsets of syntax nodes, NOPOS when unknown."""

    def start_position(self, node: Node) -> int:
        ...

    def end_position(self, node: Node) -> int:
        ...


class PositionTable:
    """Dictionary-backed SourcePositions."""

    def __init__(self):
        self._spans: dict[Node, Span] = {}

    def record(self, node: Node, start: int, end: int = NOPOS) -> Node:
        """Record the span of a node and return the node."""
        self._spans[node] = Span(start, end)
        return node

    def start_position(self, node: Node) -> int:
        span = self._spans.get(node)
        return span.start if span is not None else NOPOS

    def end_position(self, node: Node) -> int:
        span = self._spans.get(node)
        return span.end if span is not None else NOPOS

    def __contains__(self, node: Node) -> bool:
        return node in self._spans

    def __len__(self) -> int:
        return len(self._spans)
