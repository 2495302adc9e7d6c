"""Tests for identifier localization inside declaration spans."""

from locus.locator import BoundingBoxLocator
from locus.models import NOPOS, Span
from locus.syntax import (
    ClassNode,
    MemberSelectNode,
    MethodNode,
    ModifiersNode,
    Node,
    PositionTable,
    TypeNode,
    VariableNode,
)


def annotated_class(source: str, modifiers_end: int) -> tuple[BoundingBoxLocator, ClassNode]:
    table = PositionTable()
    modifiers = table.record(ModifiersNode(), 0, modifiers_end)
    node = table.record(ClassNode(name="Foo", modifiers=modifiers), 0, len(source))
    return BoundingBoxLocator(source, table), node


class TestClassLocation:

    def test_name_after_annotation(self):
        source = "@Deprecated\npublic class Foo {}"
        locator, node = annotated_class(source, modifiers_end=18)

        assert locator.for_class(node) == Span(25, 28)

    def test_name_repeated_inside_annotation_argument(self):
        source = '@Named("Foo")\npublic class Foo {}'
        locator, node = annotated_class(source, modifiers_end=20)

        span = locator.for_class(node)

        assert span == Span(27, 30)
        assert source[span.start:span.end] == "Foo"
        assert source[:span.start].endswith("class ")

    def test_unknown_modifiers_end_falls_back_to_class_start(self):
        source = '@Named("Foo")\npublic class Foo {}'
        locator, node = annotated_class(source, modifiers_end=NOPOS)

        # Falls back to a plain search from the class start
        assert locator.for_class(node) == Span(8, 11)

    def test_class_without_modifiers(self):
        source = "class Foo {}"
        table = PositionTable()
        node = table.record(ClassNode(name="Foo"), 0, len(source))

        assert BoundingBoxLocator(source, table).for_class(node) == Span(6, 9)

    def test_missing_name_is_unknown_span(self):
        source = "public class Foo {}"
        locator, node = annotated_class(source, modifiers_end=6)
        node.name = "Bar"

        assert locator.for_class(node) == Span(NOPOS, NOPOS)

    def test_first_occurrence_after_anchor_wins(self):
        source = "public class /* Foo */ Foo {}"
        locator, node = annotated_class(source, modifiers_end=6)

        # Known limitation of the textual search
        assert locator.for_class(node) == Span(16, 19)


class TestMethodLocation:

    def _method(self, source, return_type_end=12):
        table = PositionTable()
        modifiers = table.record(ModifiersNode(), 0, 7)
        return_type = table.record(TypeNode(text="Item"), 8, return_type_end)
        node = table.record(
            MethodNode(name="Item", modifiers=modifiers, return_type=return_type),
            0,
            len(source),
        )
        return BoundingBoxLocator(source, table), node

    def test_name_after_return_type(self):
        source = "private Item Item() { return null; }"
        locator, node = self._method(source)

        assert locator.for_method(node) == Span(13, 17)

    def test_unknown_return_type_end_falls_back_to_method_start(self):
        source = "private Item Item() { return null; }"
        locator, node = self._method(source, return_type_end=NOPOS)

        assert locator.for_method(node) == Span(8, 12)

    def test_constructor_with_override_name(self):
        source = "public Foo(int x) {}"
        table = PositionTable()
        modifiers = table.record(ModifiersNode(), 0, 6)
        node = table.record(MethodNode(name="<init>", modifiers=modifiers), 0, len(source))

        assert BoundingBoxLocator(source, table).for_method(node, "Foo") == Span(7, 10)

    def test_constructor_with_unknown_modifiers_end(self):
        source = "public Foo(int x) {}"
        table = PositionTable()
        modifiers = table.record(ModifiersNode(), 0, NOPOS)
        node = table.record(MethodNode(name="Foo", modifiers=modifiers), 0, len(source))

        assert BoundingBoxLocator(source, table).for_method(node) == Span(7, 10)

    def test_method_without_modifiers_or_return_type(self):
        source = "Foo() {}"
        table = PositionTable()
        node = table.record(MethodNode(name="Foo"), 0, len(source))

        assert BoundingBoxLocator(source, table).for_method(node) == Span(0, 3)


class TestVariableLocation:

    def _variable(self, source, type_end):
        table = PositionTable()
        var_type = table.record(TypeNode(text="Count"), 6, type_end)
        node = table.record(VariableNode(name="Count", type=var_type), 0, len(source))
        return BoundingBoxLocator(source, table), node

    def test_name_after_type(self):
        source = "final Count Count = null;"
        locator, node = self._variable(source, type_end=11)

        assert locator.for_variable(node) == Span(12, 17)

    def test_unknown_type_end_falls_back_to_variable_start(self):
        source = "final Count Count = null;"
        locator, node = self._variable(source, type_end=NOPOS)

        assert locator.for_variable(node) == Span(6, 11)

    def test_variable_without_type(self):
        source = "x -> x + 1"
        table = PositionTable()
        node = table.record(VariableNode(name="x"), 0, 1)

        assert BoundingBoxLocator(source, table).for_variable(node) == Span(0, 1)


class TestMemberSelectLocation:

    def _select(self, expression_end):
        source = "foo.bar.foo"
        table = PositionTable()
        expression = table.record(Node(kind="member_select"), 0, expression_end)
        node = table.record(MemberSelectNode(identifier="foo", expression=expression), 0, len(source))
        return BoundingBoxLocator(source, table), node

    def test_identifier_after_qualifier(self):
        locator, node = self._select(expression_end=7)

        assert locator.for_member_select(node) == Span(8, 11)

    def test_unknown_qualifier_end_falls_back_to_select_start(self):
        locator, node = self._select(expression_end=NOPOS)

        assert locator.for_member_select(node) == Span(0, 3)


def test_node_missing_from_table_searches_from_document_start():
    source = "class Foo {}"
    node = ClassNode(name="Foo")

    assert BoundingBoxLocator(source, PositionTable()).for_class(node) == Span(6, 9)
