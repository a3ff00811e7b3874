"""
Random collaborators used by the builders.

Names, literals, field types and method bodies are produced by small
injectable objects. The default implementations draw from one shared
``random.Random`` so a whole run is reproducible from a single seed.
"""

from __future__ import annotations

import random
from typing import Protocol

from .decl_nodes import INDENT, PrimitiveType
from .errors import Diagnostic, ErrorKind, Lookup

JAVA_KEYWORDS = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "false", "final", "finally", "float", "for", "goto", "if",
        "implements", "import", "instanceof", "int", "interface", "long", "native",
        "new", "null", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized", "this",
        "throw", "throws", "transient", "true", "try", "var", "void", "volatile",
        "while", "yield", "record",
    }
)

_CONSONANTS = "bcdfghjklmnprstvz"
_VOWELS = "aeiou"


class NameGenerator(Protocol):
    def generate(self) -> str: ...


class LiteralGenerator(Protocol):
    def literal_for(self, type_name: PrimitiveType) -> str: ...


class FieldTypePolicy(Protocol):
    def choose(self) -> PrimitiveType: ...


class BodyGenerator(Protocol):
    def body_for(self, owner: str, method_name: str) -> str: ...


class RandomNameGenerator:
    """Pronounceable lowercase identifiers built from consonant-vowel syllables."""

    def __init__(self, rng: random.Random, min_syllables: int = 2, max_syllables: int = 4):
        self.rng = rng
        self.min_syllables = min_syllables
        self.max_syllables = max_syllables

    def generate(self) -> str:
        while True:
            count = self.rng.randint(self.min_syllables, self.max_syllables)
            name = "".join(self.rng.choice(_CONSONANTS) + self.rng.choice(_VOWELS) for _ in range(count))
            if name not in JAVA_KEYWORDS:
                return name


class RandomLiteralGenerator:
    """Java literals that are assignable to the requested primitive type."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    def literal_for(self, type_name: PrimitiveType) -> str:
        match type_name:
            case PrimitiveType.BOOLEAN:
                return "true" if self.rng.random() < 0.5 else "false"
            case PrimitiveType.BYTE:
                return str(self.rng.randint(-128, 127))
            case PrimitiveType.SHORT:
                return str(self.rng.randint(-32768, 32767))
            case PrimitiveType.INT:
                return str(self.rng.randint(-100000, 100000))
            case PrimitiveType.LONG:
                return f"{self.rng.randint(-10**12, 10**12)}L"
            case PrimitiveType.FLOAT:
                return f"{self.rng.uniform(-1000, 1000):.2f}f"
            case PrimitiveType.DOUBLE:
                return f"{self.rng.uniform(-1000, 1000):.4f}"
            case PrimitiveType.CHAR:
                return f"'{self.rng.choice('abcdefghijklmnopqrstuvwxyz')}'"
        raise ValueError(f"No literal form for type {type_name!r}")


class UniformFieldTypePolicy:
    """Picks a primitive type uniformly."""

    def __init__(self, rng: random.Random, types: list[PrimitiveType] | None = None):
        self.rng = rng
        self.types = types or list(PrimitiveType)

    def choose(self) -> PrimitiveType:
        return self.rng.choice(self.types)


class RandomBodyGenerator:
    """Method bodies made of local variable declarations.

    Every body is a block holding at least one statement, one per line,
    ending with a newline after the closing brace.
    """

    def __init__(
        self,
        rng: random.Random,
        names: NameGenerator,
        literals: LiteralGenerator,
        field_types: FieldTypePolicy,
        max_statements: int = 3,
    ):
        self.rng = rng
        self.names = names
        self.literals = literals
        self.field_types = field_types
        self.max_statements = max_statements

    def body_for(self, owner: str, method_name: str) -> str:
        lines = ["{"]
        used: set[str] = set()
        for _ in range(self.rng.randint(1, max(1, self.max_statements))):
            name = self.names.generate()
            if name in used:
                continue
            used.add(name)
            type_name = self.field_types.choose()
            lines.append(f"{INDENT}{type_name.value} {name} = {self.literals.literal_for(type_name)};")
        lines.append("}")
        return "\n".join(lines) + "\n"


def count_braces(text: str) -> tuple[int, int]:
    """Count ``{`` and ``}`` outside char/string literals and line comments."""
    open_braces = close_braces = 0
    quote = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 1
            elif ch == quote or ch == "\n":
                quote = None
        elif ch in "'\"":
            quote = ch
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
            continue
        elif ch == "{":
            open_braces += 1
        elif ch == "}":
            close_braces += 1
        i += 1
    return open_braces, close_braces


def check_body(subject: str, body: str) -> Lookup[str]:
    """Structural check a body must pass before it is registered."""
    stripped = body.strip()
    open_braces, close_braces = count_braces(stripped)
    reason = None
    if not stripped.startswith("{") or not stripped.endswith("}"):
        reason = "body is not a block"
    elif open_braces != close_braces:
        reason = f"unbalanced braces: {open_braces} open, {close_braces} close"
    elif not body.endswith("\n"):
        reason = "body does not end with a newline"
    if reason is not None:
        return Lookup(error=Diagnostic(ErrorKind.BODY_SYNTHESIS_FAILED, subject, reason))
    return Lookup.ok(body)
