"""Semantic element and type descriptors supplied by the semantic model.

Elements refer to their enclosing element by id into an ElementTable that the
producer owns. Because an element can only be added after its enclosing
element, enclosing chains are always acyclic.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from lsprotocol import types as lsp


class ElementKind(Enum):
    PACKAGE = auto()
    CLASS = auto()
    INTERFACE = auto()
    ENUM = auto()
    ANNOTATION_TYPE = auto()
    METHOD = auto()
    CONSTRUCTOR = auto()
    STATIC_INIT = auto()
    INSTANCE_INIT = auto()
    FIELD = auto()
    PARAMETER = auto()
    LOCAL_VARIABLE = auto()
    EXCEPTION_PARAMETER = auto()
    RESOURCE_VARIABLE = auto()
    ENUM_CONSTANT = auto()
    TYPE_PARAMETER = auto()
    OTHER = auto()

    def is_class(self) -> bool:
        return self in (ElementKind.CLASS, ElementKind.ENUM)

    def is_interface(self) -> bool:
        return self in (ElementKind.INTERFACE, ElementKind.ANNOTATION_TYPE)


class Modifier(Enum):
    """Java modifiers, in the order they are rendered."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    SEALED = "sealed"
    NON_SEALED = "non-sealed"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"

    def __str__(self) -> str:
        return self.value


_MODIFIER_ORDER = {modifier: index for index, modifier in enumerate(Modifier)}


def sort_modifiers(modifiers) -> list[Modifier]:
    return sorted(modifiers, key=_MODIFIER_ORDER.__getitem__)


class TypeKind(Enum):
    DECLARED = auto()
    EXECUTABLE = auto()
    PRIMITIVE = auto()
    ARRAY = auto()
    TYPEVAR = auto()
    WILDCARD = auto()
    VOID = auto()
    NONE = auto()
    ERROR = auto()
    OTHER = auto()


@dataclass(frozen=True)
class DeclaredType:
    """A nominal type with its textual rendering, e.g. java.util.List<T>."""
    text: str
    kind: TypeKind = field(default=TypeKind.DECLARED, init=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class OtherType:
    """Any non-declared, non-executable type (primitives, arrays, void, ...)."""
    kind: TypeKind
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ExecutableType:
    """The function-shaped type of a method or constructor."""
    parameter_types: tuple["TypeDescriptor", ...] = ()
    return_type: "TypeDescriptor | None" = None
    thrown_types: tuple["TypeDescriptor", ...] = ()
    type_variables: tuple["TypeDescriptor", ...] = ()
    receiver_type: "TypeDescriptor | None" = None
    kind: TypeKind = field(default=TypeKind.EXECUTABLE, init=False)


TypeDescriptor = DeclaredType | ExecutableType | OtherType

NO_TYPE = OtherType(TypeKind.NONE, "none")
VOID = OtherType(TypeKind.VOID, "void")

ElementId = int


@dataclass(frozen=True, kw_only=True)
class Element:
    """Base element; used directly for kinds without a dedicated variant.

    text is the semantic model's own rendering of the element. When absent,
    elements render as their qualified name (packages and types) or their
    simple name.
    """
    kind: ElementKind
    name: str
    modifiers: frozenset[Modifier] = frozenset()
    enclosing: ElementId | None = None
    type: TypeDescriptor | None = None
    text: str | None = None

    def __str__(self) -> str:
        return self.text if self.text is not None else self.name


@dataclass(frozen=True, kw_only=True)
class PackageElement(Element):
    kind: ElementKind = ElementKind.PACKAGE
    name: str = ""
    qualified_name: str = ""

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        return self.qualified_name or self.name


@dataclass(frozen=True, kw_only=True)
class TypeElement(Element):
    """A class, interface, enum or annotation type."""
    kind: ElementKind = ElementKind.CLASS
    qualified_name: str = ""

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        return self.qualified_name or self.name


@dataclass(frozen=True, kw_only=True)
class VariableElement(Element):
    """A field, parameter, local variable, exception parameter or enum constant."""
    kind: ElementKind = ElementKind.FIELD


@dataclass(frozen=True, kw_only=True)
class TypeParameterElement(Element):
    kind: ElementKind = ElementKind.TYPE_PARAMETER


@dataclass(frozen=True, kw_only=True)
class ExecutableElement(Element):
    """A method or constructor. Constructors are named <init>."""
    kind: ElementKind = ElementKind.METHOD
    parameters: tuple[VariableElement, ...] = ()
    return_type: TypeDescriptor | None = None
    thrown_types: tuple[TypeDescriptor, ...] = ()
    type_parameters: tuple[TypeParameterElement, ...] = ()

    @property
    def is_constructor(self) -> bool:
        return self.kind == ElementKind.CONSTRUCTOR or self.name == "<init>"

    @property
    def effective_return_type(self) -> TypeDescriptor | None:
        """The declared return type, falling back to the executable type's."""
        if self.return_type is not None:
            return self.return_type
        if isinstance(self.type, ExecutableType):
            return self.type.return_type
        return None


class ElementTable:
    """Id-indexed storage for elements produced by one semantic model."""

    def __init__(self):
        self._elements: list[Element] = []

    def add(self, element: Element) -> ElementId:
        """Store an element and return its id.

        Raises:
            KeyError: If the element's enclosing id is not in the table
        """
        if element.enclosing is not None and not 0 <= element.enclosing < len(self._elements):
            raise KeyError(f"Unknown enclosing element id: {element.enclosing}")
        self._elements.append(element)
        return len(self._elements) - 1

    def __getitem__(self, element_id: ElementId) -> Element:
        return self._elements[element_id]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def enclosing(self, element: Element) -> Element | None:
        if element.enclosing is None:
            return None
        return self._elements[element.enclosing]

    def chain(self, element: Element):
        """Yield element and then each enclosing element, innermost first."""
        current: Element | None = element
        while current is not None:
            yield current
            current = self.enclosing(current)


def is_top_level(kind: ElementKind) -> bool:
    return kind.is_class() or kind.is_interface()


def top_level_class(element: Element, table: ElementTable) -> Element | None:
    """The outermost class or interface enclosing element (element included)."""
    highest = None
    for current in table.chain(element):
        if is_top_level(current.kind):
            highest = current
    return highest


def package_name(element: Element, table: ElementTable) -> str | None:
    """Qualified name of the package containing element, or None."""
    for current in table.chain(element):
        if isinstance(current, PackageElement):
            return current.qualified_name
    return None


_SYMBOL_KIND_MAP = {
    ElementKind.INTERFACE: lsp.SymbolKind.Interface,
    ElementKind.CLASS: lsp.SymbolKind.Class,
    ElementKind.PACKAGE: lsp.SymbolKind.Package,
    ElementKind.METHOD: lsp.SymbolKind.Method,
    ElementKind.CONSTRUCTOR: lsp.SymbolKind.Constructor,
    ElementKind.FIELD: lsp.SymbolKind.Field,
    ElementKind.ENUM: lsp.SymbolKind.Enum,
}


def to_symbol_kind(kind: ElementKind | None) -> lsp.SymbolKind | None:
    """LSP symbol kind for an element kind, None for kinds without one."""
    if kind is None:
        return None
    return _SYMBOL_KIND_MAP.get(kind)
