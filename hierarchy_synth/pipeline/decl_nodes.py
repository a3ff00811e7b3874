"""
Declaration node definitions.

These nodes describe a synthesized class or interface: its modifiers,
superclass and interfaces (held by name and resolved through the pool),
fields, constructors and methods. Method and constructor bodies are not
stored here; they live in a ``MethodBodyTable`` keyed by ``MethodKey``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import FrozenDeclError

INDENT = "    "  # 4 spaces

VOID = "void"

CONSTRUCTOR_NAME = "<init>"

# Implicit root of every class hierarchy
ROOT_TYPES = frozenset({"Object", "java.lang.Object"})


class Visibility(str, Enum):
    """Java access modifiers."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = ""  # package-private, no keyword


class PrimitiveType(str, Enum):
    """Java primitive types used for fields."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    CHAR = "char"


class DeclKind(str, Enum):
    """Kind of top-level declaration."""

    CLASS = "class"
    INTERFACE = "interface"


# A type is either a primitive or the (possibly qualified) name of a class
TypeName = PrimitiveType | str


@dataclass(frozen=True)
class Modifiers:
    """Visibility plus the abstract/static/final flags."""

    visibility: Visibility = Visibility.PUBLIC
    is_abstract: bool = False
    is_static: bool = False
    is_final: bool = False

    def keywords(self) -> list[str]:
        """Keywords in canonical Java order."""
        words = [self.visibility.value] if self.visibility.value else []
        if self.is_abstract:
            words.append("abstract")
        if self.is_static:
            words.append("static")
        if self.is_final:
            words.append("final")
        return words

    def __str__(self) -> str:
        return " ".join(self.keywords())


@dataclass(frozen=True)
class MethodSignature:
    """Name plus arity; parameter types never vary in this generator."""

    name: str
    arity: int = 0

    def __str__(self) -> str:
        return f"{self.name}/{self.arity}"


@dataclass(frozen=True)
class MethodKey:
    """Stable identity of a method or constructor body."""

    owner: str
    name: str
    arity: int = 0

    @staticmethod
    def for_method(owner: str, method: MethodDecl) -> MethodKey:
        return MethodKey(owner, method.name, len(method.parameters))

    @staticmethod
    def for_constructor(owner: str, constructor: ConstructorDecl) -> MethodKey:
        return MethodKey(owner, CONSTRUCTOR_NAME, len(constructor.parameters))

    def __str__(self) -> str:
        return f"{self.owner}.{self.name}/{self.arity}"


@dataclass
class FieldDecl:
    """A field of a class."""

    name: str = ""
    type_name: TypeName = PrimitiveType.INT
    modifiers: Modifiers = field(default_factory=lambda: Modifiers(Visibility.PRIVATE))

    # Compile-time constant rendered on the field line
    constant_value: str | None = None


@dataclass
class ConstructorDecl:
    """A constructor; the generator only produces parameterless ones."""

    modifiers: Modifiers = field(default_factory=Modifiers)
    parameters: list[TypeName] = field(default_factory=list)


@dataclass
class MethodDecl:
    """A method declaration."""

    name: str = ""
    modifiers: Modifiers = field(default_factory=Modifiers)
    return_type: TypeName = VOID
    parameters: list[TypeName] = field(default_factory=list)

    @property
    def is_abstract(self) -> bool:
        return self.modifiers.is_abstract

    @property
    def signature(self) -> MethodSignature:
        return MethodSignature(self.name, len(self.parameters))


@dataclass
class ClassDecl:
    """A class or interface declaration.

    Populated once by a builder, then frozen: after ``freeze`` no attribute
    can be reassigned and the member lists are tuples. The superclass and
    interfaces are names looked up in the ``HierarchyPool``; a declaration
    never owns its ancestors.
    """

    name: str = ""
    modifiers: Modifiers = field(default_factory=Modifiers)
    kind: DeclKind = DeclKind.CLASS

    superclass: str | None = None
    interfaces: list[str] = field(default_factory=list)

    fields: list[FieldDecl] = field(default_factory=list)
    constructors: list[ConstructorDecl] = field(default_factory=list)
    methods: list[MethodDecl] = field(default_factory=list)

    frozen: bool = False

    def __post_init__(self) -> None:
        if self.frozen:
            self.freeze()

    def __setattr__(self, name: str, value) -> None:
        if getattr(self, "frozen", False):
            raise FrozenDeclError(self.name)
        super().__setattr__(name, value)

    @property
    def is_abstract(self) -> bool:
        return self.modifiers.is_abstract

    @property
    def is_interface(self) -> bool:
        return self.kind == DeclKind.INTERFACE

    @property
    def has_superclass(self) -> bool:
        """Whether an explicit, non-root superclass is attached."""
        return self.superclass is not None and self.superclass not in ROOT_TYPES

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def _check_mutable(self) -> None:
        if self.frozen:
            raise FrozenDeclError(self.name)

    def set_superclass(self, name: str) -> None:
        self._check_mutable()
        self.superclass = name

    def add_interface(self, name: str) -> None:
        self._check_mutable()
        if name not in self.interfaces:
            self.interfaces.append(name)

    def add_field(self, field_decl: FieldDecl) -> None:
        self._check_mutable()
        self.fields.append(field_decl)

    def add_constructor(self, constructor: ConstructorDecl) -> None:
        self._check_mutable()
        self.constructors.append(constructor)

    def add_method(self, method: MethodDecl) -> None:
        self._check_mutable()
        self.methods.append(method)

    def freeze(self) -> ClassDecl:
        """Make the declaration immutable; member lists become tuples."""
        for name in ("interfaces", "fields", "constructors", "methods"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "frozen", True)
        return self

    def field_names(self) -> set[str]:
        return {f.name for f in self.fields}

    def method_names(self) -> set[str]:
        return {m.name for m in self.methods}

    def abstract_methods(self) -> list[MethodDecl]:
        return [m for m in self.methods if m.is_abstract]

    def concrete_methods(self) -> list[MethodDecl]:
        return [m for m in self.methods if not m.is_abstract]

    def find_method(self, signature: MethodSignature) -> MethodDecl | None:
        return next((m for m in self.methods if m.signature == signature), None)


class MethodBodyTable:
    """Maps method/constructor identities to their source bodies."""

    def __init__(self) -> None:
        self._bodies: dict[MethodKey, str] = {}

    def register(self, key: MethodKey, body: str) -> None:
        self._bodies[key] = body

    def get(self, key: MethodKey) -> str | None:
        return self._bodies.get(key)

    def __contains__(self, key: MethodKey) -> bool:
        return key in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)
