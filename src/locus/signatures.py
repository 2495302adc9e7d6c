"""Signature strings for declarations and types.

Two forms are produced. The canonical form is the full, human-oriented
rendering of a declaration. The cross-representation form identifies a symbol
in a way that comes out identical whether the element was built from a raw
parse (types as written in source) or from a fully resolved model (qualified
types, different whitespace). Its normalizations are:

- parameter types are reduced to simple names,
- executables in a qualified-name chain render as ``[<T,U>]name(P1,P2)``,
- commas are not followed by a space.

Symbols referenced from other repositories are matched on this form, so the
rules above must not change.
"""

import re
from dataclasses import dataclass
from enum import Enum

from locus.elements import (
    Element,
    ElementKind,
    ElementTable,
    ExecutableElement,
    ExecutableType,
    PackageElement,
    TypeDescriptor,
    TypeElement,
    TypeKind,
    sort_modifiers,
)

_CLASS_KEYWORDS = {
    ElementKind.CLASS: "class",
    ElementKind.INTERFACE: "interface",
    ElementKind.ENUM: "enum",
    ElementKind.ANNOTATION_TYPE: "@interface",
}

_VARIABLE_KINDS = frozenset({
    ElementKind.ENUM_CONSTANT,
    ElementKind.EXCEPTION_PARAMETER,
    ElementKind.FIELD,
    ElementKind.LOCAL_VARIABLE,
    ElementKind.PARAMETER,
})

_QUALIFIED_NAME = re.compile(r"(?:[A-Za-z_$][\w$]*\.)+([A-Za-z_$][\w$]*)")


class SignatureMode(Enum):
    CANONICAL = "canonical"
    CROSS_REPRESENTATION = "cross_representation"


@dataclass(frozen=True)
class Signature:
    text: str
    mode: SignatureMode = SignatureMode.CANONICAL

    def __str__(self) -> str:
        return self.text


def signature(
    element: Element,
    table: ElementTable,
    mode: SignatureMode = SignatureMode.CANONICAL
) -> Signature:
    """Build the signature of an element in the requested form.

    Args:
        element: Element to sign
        table: Table resolving the element's enclosing ids
        mode: CANONICAL for element_signature, CROSS_REPRESENTATION for
            cross_repo_qualified_name

    Returns:
        Immutable Signature
    """
    if mode == SignatureMode.CROSS_REPRESENTATION:
        return Signature(cross_repo_qualified_name(element, table), mode)
    return Signature(element_signature(element, table), mode)


def element_signature(element: Element, table: ElementTable) -> str:
    """Canonical signature of any element kind."""
    kind = element.kind
    if kind == ElementKind.PACKAGE:
        return f"package {element}"
    if kind in _CLASS_KEYWORDS:
        return f"{modifiers_prefix(element)}{_CLASS_KEYWORDS[kind]} {_declared_type(element)}"
    if kind in (ElementKind.METHOD, ElementKind.CONSTRUCTOR) and isinstance(element, ExecutableElement):
        return method_signature(element, table)
    if kind in _VARIABLE_KINDS:
        return f"{modifiers_prefix(element)}{type_signature(element.type)} {element}"
    return str(element)


def method_signature(element: ExecutableElement, table: ElementTable) -> str:
    """Canonical signature of a method or constructor.

    Constructors render the simple name of their enclosing type instead of a
    return type and name.
    """
    sig = modifiers_prefix(element)

    type_vars = [element_signature(tp, table).strip() for tp in element.type_parameters]
    if type_vars:
        sig += "<" + ", ".join(type_vars) + "> "

    if element.is_constructor:
        owner = table.enclosing(element)
        sig += owner.name if owner is not None else element.name
    else:
        sig += type_signature(element.effective_return_type) + " " + element.name

    params = [element_signature(param, table).strip() for param in element.parameters]
    sig += "(" + ", ".join(params) + ")"

    thrown = [type_signature(t) for t in element.thrown_types]
    if thrown:
        sig += " throws " + ", ".join(thrown)
    return sig


def type_signature(descriptor: TypeDescriptor | None) -> str:
    """Render a type; executable types render as ``<T> R::(A, B) -> C throws E``."""
    if descriptor is None:
        return ""
    if not isinstance(descriptor, ExecutableType):
        return descriptor.text

    sig = ""
    type_vars = [type_signature(t) for t in descriptor.type_variables]
    if type_vars:
        sig += "<" + ", ".join(type_vars) + "> "
    receiver = descriptor.receiver_type
    if receiver is not None and receiver.kind != TypeKind.NONE:
        sig += type_signature(receiver) + "::"
    sig += "(" + ", ".join(type_signature(t) for t in descriptor.parameter_types) + ") -> "
    sig += type_signature(descriptor.return_type)
    thrown = [type_signature(t) for t in descriptor.thrown_types]
    if thrown:
        sig += " throws " + ", ".join(thrown)
    return sig


def modifiers_prefix(element: Element) -> str:
    """Modifiers in declaration order, each followed by a space."""
    if not element.modifiers:
        return ""
    return " ".join(str(m) for m in sort_modifiers(element.modifiers)) + " "


def qualified_name(element: Element, table: ElementTable) -> str:
    """Dotted name of element built from its enclosing chain, e.g. p.C.m."""
    return _qualified_name(element, table, cross_repo=False)


def cross_repo_qualified_name(element: Element, table: ElementTable) -> str:
    """Qualified name where each executable renders as its short signature."""
    return _qualified_name(element, table, cross_repo=True)


def _qualified_name(element: Element, table: ElementTable, cross_repo: bool) -> str:
    names = []
    for current in table.chain(element):
        if isinstance(current, (PackageElement, TypeElement)):
            names.append(str(current))
            break
        if cross_repo and isinstance(current, ExecutableElement):
            names.append(cross_repo_method_name(current, table))
        else:
            names.append(str(current))
    names.reverse()
    return ".".join(names)


def cross_repo_method_name(element: ExecutableElement, table: ElementTable) -> str:
    """Short executable signature that raw-parse and resolved elements agree on."""
    sig = ""
    type_params = ",".join(tp.name for tp in element.type_parameters)
    if type_params:
        sig += "<" + type_params + ">"

    name = element.name
    if element.is_constructor:
        owner = table.enclosing(element)
        if owner is not None:
            name = owner.name
    sig += name

    params = ",".join(simple_type_name(type_signature(p.type)) for p in element.parameters)
    sig += "(" + params + ")"

    # Type renderings differ in spacing after commas depending on where they
    # came from.
    return sig.replace(", ", ",")


def simple_type_name(type_text: str) -> str:
    """Reduce every dotted qualified name in a type to its last segment.

    java.util.Map<java.lang.String, Foo.Bar> becomes Map<String, Bar>.
    """
    return _QUALIFIED_NAME.sub(r"\1", type_text)


def _declared_type(element: Element) -> str:
    if element.type is None:
        return str(element)
    return type_signature(element.type)
