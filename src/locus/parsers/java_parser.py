"""Raw parse of Java compilation units using tree-sitter.

The parser stands in for a compiler front end that has not run type
resolution. Its output deliberately has the same shape as a compiler's:

- the position table only holds spans of declarations and of the syntax
  preceding their names (modifiers, types), never of the name tokens,
- elements carry types exactly as written in source, unqualified.
"""

import logging
from bisect import bisect_left

import tree_sitter_java
from tree_sitter import Language, Parser

from locus.document import SourceDocument
from locus.elements import (
    VOID,
    DeclaredType,
    ElementId,
    ElementKind,
    ExecutableElement,
    ExecutableType,
    Modifier,
    OtherType,
    PackageElement,
    TypeDescriptor,
    TypeElement,
    TypeKind,
    TypeParameterElement,
    VariableElement,
)
from locus.parsers.base import BaseParser, Declaration, ParsedUnit
from locus.syntax import ClassNode, MethodNode, ModifiersNode, Node, TypeNode, VariableNode

logger = logging.getLogger(__name__)

_TYPE_KINDS = {
    "class_declaration": ElementKind.CLASS,
    "record_declaration": ElementKind.CLASS,
    "interface_declaration": ElementKind.INTERFACE,
    "enum_declaration": ElementKind.ENUM,
    "annotation_type_declaration": ElementKind.ANNOTATION_TYPE,
}

_PRIMITIVES = frozenset({"boolean", "byte", "short", "int", "long", "char", "float", "double"})

_MODIFIER_KEYWORDS = {modifier.value: modifier for modifier in Modifier}

_ENUM_CONSTANT_MODIFIERS = frozenset({Modifier.PUBLIC, Modifier.STATIC, Modifier.FINAL})


class _ByteOffsets:
    """Maps the UTF-8 byte offsets tree-sitter reports to character offsets."""

    def __init__(self, source_code: str):
        self._ascii = source_code.isascii()
        self._boundaries: list[int] = []
        if not self._ascii:
            total = 0
            self._boundaries.append(0)
            for ch in source_code:
                total += len(ch.encode("utf-8"))
                self._boundaries.append(total)

    def char_offset(self, byte_offset: int) -> int:
        if self._ascii:
            return byte_offset
        return bisect_left(self._boundaries, byte_offset)


class JavaParser(BaseParser):
    """Parser producing raw syntax nodes and elements from Java source code."""

    def __init__(self):
        self.language = Language(tree_sitter_java.language())
        self.parser = Parser(self.language)

    def parse(self, source_code: str, file_path: str) -> ParsedUnit:
        """Parse a Java compilation unit.

        Args:
            source_code: Java source code to parse
            file_path: Path of the file, used for the document URI

        Returns:
            ParsedUnit with one declaration per package, type, method,
            constructor, field and enum constant
        """
        tree = self.parser.parse(bytes(source_code, "utf8"))
        unit = ParsedUnit(document=SourceDocument.from_text(source_code, file_path))
        _UnitBuilder(source_code, unit).build(tree.root_node)
        return unit


class _UnitBuilder:
    """Walks one tree-sitter tree and fills a ParsedUnit."""

    def __init__(self, source_code: str, unit: ParsedUnit):
        self.source_code = source_code
        self.unit = unit
        self.offsets = _ByteOffsets(source_code)

    def build(self, root) -> None:
        package_id, prefix = self._package(root)
        for child in root.named_children:
            if child.type in _TYPE_KINDS:
                self.unit.nodes.append(self._type_declaration(child, package_id, prefix))

    def _package(self, root) -> tuple[ElementId, str]:
        for child in root.named_children:
            if child.type != "package_declaration":
                continue
            name_ts = _first_child(child, "scoped_identifier", "identifier")
            if name_ts is None:
                break
            qualified = self._text(name_ts)
            element_id = self.unit.elements.add(PackageElement(
                name=qualified.rsplit(".", 1)[-1],
                qualified_name=qualified,
            ))
            node = self._record(Node(kind="package"), child)
            self.unit.nodes.append(node)
            self.unit.declarations.append(Declaration(node, element_id))
            return element_id, qualified

        # Unnamed package
        return self.unit.elements.add(PackageElement()), ""

    def _type_declaration(self, ts, enclosing_id: ElementId, prefix: str) -> ClassNode:
        name = self._text(ts.child_by_field_name("name"))
        modifiers_ts = _first_child(ts, "modifiers")
        class_node = self._record(
            ClassNode(name=name, modifiers=self._modifiers_node(modifiers_ts)),
            ts,
        )
        qualified = f"{prefix}.{name}" if prefix else name

        type_text = qualified
        type_param_names = [tp.name for tp in self._type_parameters(ts)]
        if type_param_names:
            type_text += "<" + ", ".join(type_param_names) + ">"

        element_id = self.unit.elements.add(TypeElement(
            kind=_TYPE_KINDS[ts.type],
            name=name,
            qualified_name=qualified,
            modifiers=self._modifiers(modifiers_ts),
            enclosing=enclosing_id,
            type=DeclaredType(type_text),
        ))
        self.unit.declarations.append(Declaration(class_node, element_id))

        body = ts.child_by_field_name("body")
        if body is not None:
            self._body(body, class_node, element_id, qualified)
        return class_node

    def _body(self, body, class_node: ClassNode, owner_id: ElementId, qualified: str) -> None:
        for member in body.named_children:
            kind = member.type
            if kind in _TYPE_KINDS:
                class_node.members.append(self._type_declaration(member, owner_id, qualified))
            elif kind in ("method_declaration", "constructor_declaration"):
                class_node.members.append(self._executable(member, owner_id, class_node.name))
            elif kind in ("field_declaration", "constant_declaration"):
                class_node.members.extend(self._fields(member, owner_id))
            elif kind == "enum_constant":
                class_node.members.append(self._enum_constant(member, owner_id, qualified))
            elif kind == "enum_body_declarations":
                self._body(member, class_node, owner_id, qualified)
            elif not kind.endswith("comment"):
                logger.debug(f"Skipping {kind} in {qualified}")

    def _executable(self, ts, owner_id: ElementId, owner_name: str) -> MethodNode:
        constructor = ts.type == "constructor_declaration"
        name = self._text(ts.child_by_field_name("name"))
        modifiers_ts = _first_child(ts, "modifiers")

        return_type = None
        return_node = None
        if not constructor:
            return_ts = ts.child_by_field_name("type")
            return_text = self._text(return_ts)
            return_node = self._record(TypeNode(text=return_text), return_ts)
            return_type = _type_from_source(return_text)

        parameter_nodes = []
        parameters = []
        params_ts = ts.child_by_field_name("parameters")
        if params_ts is not None:
            for param_ts in params_ts.named_children:
                parameter = self._parameter(param_ts)
                if parameter is not None:
                    parameter_nodes.append(parameter[0])
                    parameters.append(parameter[1])

        thrown_types = ()
        throws_ts = _first_child(ts, "throws")
        if throws_ts is not None:
            thrown_types = tuple(_type_from_source(self._text(t)) for t in throws_ts.named_children)

        type_parameters = self._type_parameters(ts)
        method_node = self._record(
            MethodNode(
                name=name,
                modifiers=self._modifiers_node(modifiers_ts),
                return_type=return_node,
                parameters=parameter_nodes,
            ),
            ts,
        )
        element_id = self.unit.elements.add(ExecutableElement(
            kind=ElementKind.CONSTRUCTOR if constructor else ElementKind.METHOD,
            name="<init>" if constructor else name,
            modifiers=self._modifiers(modifiers_ts),
            enclosing=owner_id,
            parameters=tuple(parameters),
            return_type=return_type,
            thrown_types=thrown_types,
            type_parameters=type_parameters,
            type=ExecutableType(
                parameter_types=tuple(p.type for p in parameters),
                return_type=return_type if return_type is not None else VOID,
                thrown_types=thrown_types,
                type_variables=tuple(OtherType(TypeKind.TYPEVAR, tp.name) for tp in type_parameters),
            ),
            text=owner_name if constructor else None,
        ))
        self.unit.declarations.append(Declaration(method_node, element_id))
        return method_node

    def _parameter(self, ts) -> tuple[VariableNode, VariableElement] | None:
        if ts.type == "formal_parameter":
            type_ts = ts.child_by_field_name("type")
            name_ts = ts.child_by_field_name("name")
            type_text = self._text(type_ts)
            dimensions = ts.child_by_field_name("dimensions")
            if dimensions is not None:
                type_text += self._text(dimensions)
        elif ts.type == "spread_parameter":
            declarator = _first_child(ts, "variable_declarator")
            if declarator is not None:
                name_ts = declarator.child_by_field_name("name")
            else:
                name_ts = _first_child(ts, "identifier")
            type_ts = next(
                (c for c in ts.named_children
                 if c.type not in ("modifiers", "variable_declarator", "identifier")),
                None,
            )
            if name_ts is None or type_ts is None:
                return None
            type_text = self._text(type_ts) + "..."
        else:
            return None

        modifiers_ts = _first_child(ts, "modifiers")
        name = self._text(name_ts)
        node = self._record(
            VariableNode(
                name=name,
                modifiers=self._modifiers_node(modifiers_ts),
                type=self._record(TypeNode(text=type_text), type_ts),
            ),
            ts,
        )
        element = VariableElement(
            kind=ElementKind.PARAMETER,
            name=name,
            modifiers=self._modifiers(modifiers_ts),
            type=_type_from_source(type_text),
        )
        return node, element

    def _fields(self, ts, owner_id: ElementId) -> list[VariableNode]:
        modifiers_ts = _first_child(ts, "modifiers")
        modifiers_node = self._modifiers_node(modifiers_ts)
        type_ts = ts.child_by_field_name("type")
        base_type = self._text(type_ts)
        type_node = self._record(TypeNode(text=base_type), type_ts)

        nodes = []
        for declarator in ts.children_by_field_name("declarator"):
            name = self._text(declarator.child_by_field_name("name"))
            type_text = base_type
            dimensions = declarator.child_by_field_name("dimensions")
            if dimensions is not None:
                type_text += self._text(dimensions)
            node = VariableNode(name=name, modifiers=modifiers_node, type=type_node)
            self.unit.positions.record(
                node,
                self.offsets.char_offset(ts.start_byte),
                self.offsets.char_offset(declarator.end_byte),
            )
            element_id = self.unit.elements.add(VariableElement(
                kind=ElementKind.FIELD,
                name=name,
                modifiers=self._modifiers(modifiers_ts),
                enclosing=owner_id,
                type=_type_from_source(type_text),
            ))
            self.unit.declarations.append(Declaration(node, element_id))
            nodes.append(node)
        return nodes

    def _enum_constant(self, ts, owner_id: ElementId, enum_name: str) -> VariableNode:
        name = self._text(ts.child_by_field_name("name"))
        node = self._record(
            VariableNode(name=name, modifiers=self._modifiers_node(_first_child(ts, "modifiers"))),
            ts,
        )
        element_id = self.unit.elements.add(VariableElement(
            kind=ElementKind.ENUM_CONSTANT,
            name=name,
            modifiers=_ENUM_CONSTANT_MODIFIERS,
            enclosing=owner_id,
            type=DeclaredType(enum_name),
        ))
        self.unit.declarations.append(Declaration(node, element_id))
        return node

    def _type_parameters(self, ts) -> tuple[TypeParameterElement, ...]:
        params_ts = ts.child_by_field_name("type_parameters")
        if params_ts is None:
            return ()
        type_parameters = []
        for param_ts in params_ts.named_children:
            if param_ts.type != "type_parameter":
                continue
            name_ts = _first_child(param_ts, "type_identifier", "identifier")
            if name_ts is not None:
                type_parameters.append(TypeParameterElement(name=self._text(name_ts)))
        return tuple(type_parameters)

    def _modifiers_node(self, ts) -> ModifiersNode | None:
        if ts is None:
            return None
        flags = tuple(self._text(child) for child in ts.children)
        return self._record(ModifiersNode(flags=flags), ts)

    def _modifiers(self, ts) -> frozenset[Modifier]:
        if ts is None:
            return frozenset()
        return frozenset(
            _MODIFIER_KEYWORDS[child.type]
            for child in ts.children
            if child.type in _MODIFIER_KEYWORDS
        )

    def _record(self, node: Node, ts) -> Node:
        return self.unit.positions.record(
            node,
            self.offsets.char_offset(ts.start_byte),
            self.offsets.char_offset(ts.end_byte),
        )

    def _text(self, ts) -> str:
        start = self.offsets.char_offset(ts.start_byte)
        end = self.offsets.char_offset(ts.end_byte)
        # Collapse line breaks and runs of spaces inside multi-line types
        return " ".join(self.source_code[start:end].split())


def _first_child(ts, *types: str):
    for child in ts.children:
        if child.type in types:
            return child
    return None


def _type_from_source(text: str) -> TypeDescriptor:
    if text == "void":
        return VOID
    if text in _PRIMITIVES:
        return OtherType(TypeKind.PRIMITIVE, text)
    if text.endswith("]") or text.endswith("..."):
        return OtherType(TypeKind.ARRAY, text)
    return DeclaredType(text)
