"""
Java declaration renderer.

Converts a ``ClassDecl`` plus the bodies registered for it into Java source.
Layout:
- Header: modifiers, ``class``/``interface``, name, ``extends``, ``implements``
- Fields, then constructors, then methods, in declaration order
- 4-space indentation, bodies re-indented one level
- Blank line between consecutive methods

Rendering is a pure function of its inputs. A name that cannot be resolved
is reported as a diagnostic and the element using it is left out.
"""

from __future__ import annotations

import logging

from ..decl_nodes import (
    INDENT,
    ClassDecl,
    ConstructorDecl,
    FieldDecl,
    MethodBodyTable,
    MethodDecl,
    MethodKey,
    PrimitiveType,
    TypeName,
)
from ..errors import Diagnostics, Lookup

logger = logging.getLogger(__name__)


def simple_name(name: str) -> Lookup[str]:
    """Last component of a dotted Java name."""
    parts = name.split(".") if name else []
    if not parts or not all(part.isidentifier() for part in parts):
        return Lookup.not_found(repr(name), "not a valid type name")
    return Lookup.ok(parts[-1])


class JavaRenderer:
    """Renders declarations to Java source text."""

    INDENT = INDENT

    def __init__(self, diagnostics: Diagnostics | None = None):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def render(self, decl: ClassDecl, bodies: MethodBodyTable) -> str:
        """Render one declaration, ending with a newline."""
        lines = [self._header(decl) + " {"]

        # Separators follow what was rendered, not the model
        field_lines = [line for line in (self._field_line(decl, f) for f in decl.fields) if line is not None]
        constructor_lines = [line for c in decl.constructors for line in self._constructor_lines(decl, c, bodies)]
        method_blocks = [block for block in (self._method_lines(decl, m, bodies) for m in decl.methods) if block]

        lines.extend(field_lines)
        if field_lines and constructor_lines:
            lines.append("")

        lines.extend(constructor_lines)
        if constructor_lines and method_blocks:
            lines.append("")

        for i, block in enumerate(method_blocks):
            if i > 0:
                lines.append("")
            lines.extend(block)

        lines.append("}")
        return "\n".join(lines) + "\n"

    def _resolve(self, lookup: Lookup[str]) -> str | None:
        if not lookup.found:
            self.diagnostics.report(lookup.error, logger)
            return None
        return lookup.value

    def _type_name(self, type_name: TypeName) -> str | None:
        if isinstance(type_name, PrimitiveType):
            return type_name.value
        return self._resolve(simple_name(type_name))

    def _header(self, decl: ClassDecl) -> str:
        keywords = decl.modifiers.keywords()
        if decl.is_interface:
            # abstract is implicit on interfaces
            keywords = [k for k in keywords if k != "abstract"]
        header = " ".join([*keywords, decl.kind.value, decl.simple_name])

        if decl.has_superclass and not decl.is_interface:
            superclass = self._resolve(simple_name(decl.superclass))
            if superclass is not None:
                header += f" extends {superclass}"

        interfaces = [name for name in (self._resolve(simple_name(i)) for i in decl.interfaces) if name is not None]
        if interfaces:
            keyword = "extends" if decl.is_interface else "implements"
            header += f" {keyword} {', '.join(interfaces)}"
        return header

    def _field_line(self, decl: ClassDecl, field: FieldDecl) -> str | None:
        type_name = self._type_name(field.type_name)
        if type_name is None:
            logger.debug("Omitting field %s.%s", decl.name, field.name)
            return None
        line = self.INDENT + " ".join([*field.modifiers.keywords(), type_name, field.name])
        if field.constant_value is not None:
            line += f" = {field.constant_value}"
        return line + ";"

    def _parameters(self, parameters: list[TypeName]) -> str:
        rendered = []
        for i, parameter in enumerate(parameters):
            type_name = self._type_name(parameter)
            if type_name is not None:
                rendered.append(f"{type_name} var{i + 1}")
        return ", ".join(rendered)

    def _with_body(self, signature: str, body: str | None) -> list[str]:
        """Signature followed by a body block indented one level."""
        if body is None:
            return [f"{signature} {{}}"]
        body_lines = body.rstrip("\n").split("\n")
        lines = [f"{signature} {body_lines[0]}"]
        lines.extend(self.INDENT + line if line.strip() else line for line in body_lines[1:])
        return lines

    def _constructor_lines(self, decl: ClassDecl, constructor: ConstructorDecl, bodies: MethodBodyTable) -> list[str]:
        signature = self.INDENT + " ".join(
            [*constructor.modifiers.keywords(), f"{decl.simple_name}({self._parameters(constructor.parameters)})"]
        )
        return self._with_body(signature, bodies.get(MethodKey.for_constructor(decl.name, constructor)))

    def _method_lines(self, decl: ClassDecl, method: MethodDecl, bodies: MethodBodyTable) -> list[str]:
        return_type = self._type_name(method.return_type)
        if return_type is None:
            logger.debug("Omitting method %s.%s", decl.name, method.name)
            return []
        signature = self.INDENT + " ".join(
            [*method.modifiers.keywords(), return_type, f"{method.name}({self._parameters(method.parameters)})"]
        )
        if method.is_abstract:
            return [signature + ";"]
        return self._with_body(signature, bodies.get(MethodKey.for_method(decl.name, method)))
