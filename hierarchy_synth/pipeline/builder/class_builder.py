"""
Class construction.

Builds one class per call against the configuration and the pool: picks a
superclass and interfaces, overrides every inherited abstract method, then
adds fields, a constructor assigning them, abstract methods and concrete
methods. A step that has nothing to work with is skipped and recorded as a
diagnostic; ``build`` always returns a class.
"""

from __future__ import annotations

import logging
import random

from ..config import GeneratorConfig, Range
from ..decl_nodes import (
    INDENT,
    ClassDecl,
    ConstructorDecl,
    FieldDecl,
    MethodBodyTable,
    MethodDecl,
    MethodKey,
    Modifiers,
    Visibility,
)
from ..errors import Diagnostic, Diagnostics, DuplicateClassError, ErrorKind
from ..generators import (
    BodyGenerator,
    FieldTypePolicy,
    LiteralGenerator,
    NameGenerator,
    RandomBodyGenerator,
    RandomLiteralGenerator,
    RandomNameGenerator,
    UniformFieldTypePolicy,
    check_body,
)
from ..pool import HierarchyPool
from .resolver import EMPTY_BODY, AbstractMethodResolver

logger = logging.getLogger(__name__)


class ClassBuilder:
    """Builds abstract (or concrete) classes into a ``HierarchyPool``."""

    # Attempts at drawing a name that is not taken before giving up
    MAX_NAME_ATTEMPTS = 100

    def __init__(
        self,
        rng: random.Random,
        names: NameGenerator,
        literals: LiteralGenerator,
        field_types: FieldTypePolicy,
        body_generator: BodyGenerator,
        bodies: MethodBodyTable | None = None,
        diagnostics: Diagnostics | None = None,
    ):
        self.rng = rng
        self.names = names
        self.literals = literals
        self.field_types = field_types
        self.body_generator = body_generator
        self.bodies = bodies if bodies is not None else MethodBodyTable()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    @classmethod
    def seeded(
        cls,
        seed: int | None,
        bodies: MethodBodyTable | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> ClassBuilder:
        """Builder whose collaborators all share one ``random.Random(seed)``."""
        rng = random.Random(seed)
        names = RandomNameGenerator(rng)
        literals = RandomLiteralGenerator(rng)
        field_types = UniformFieldTypePolicy(rng)
        body_generator = RandomBodyGenerator(rng, names, literals, field_types)
        return cls(rng, names, literals, field_types, body_generator, bodies, diagnostics)

    def build(self, name: str, pool: HierarchyPool, config: GeneratorConfig, abstract: bool = True) -> ClassDecl:
        """Build a class named ``name``, register it in ``pool`` and return it."""
        if name in pool:
            raise DuplicateClassError(name)

        decl = ClassDecl(name=name, modifiers=Modifiers(Visibility.PUBLIC, is_abstract=abstract))
        resolver = AbstractMethodResolver(pool, self.diagnostics)

        superclass = self._attach_superclass(decl, pool, config)
        self._attach_interfaces(decl, pool, config)
        self._discharge_obligations(decl, superclass, resolver)

        method_names = resolver.inherited_method_names(superclass, decl.interfaces)
        method_names.update(decl.method_names())
        method_names.add(decl.simple_name)

        self._add_fields_and_constructor(decl, config.fields)
        if decl.is_abstract:
            self._add_abstract_methods(decl, config.abstract_methods, method_names)
        self._add_concrete_methods(decl, config.concrete_methods, method_names)

        pool.add(decl)
        logger.debug(
            "Built %s: superclass=%s, interfaces=%s, %d fields, %d methods",
            decl.name,
            decl.superclass,
            decl.interfaces,
            len(decl.fields),
            len(decl.methods),
        )
        return decl

    def _draw(self, bounds: Range) -> int:
        return self.rng.randint(bounds.min, bounds.max)

    def _skip(self, kind: ErrorKind, subject: str, message: str) -> None:
        self.diagnostics.report(Diagnostic(kind, subject, message), logger)

    def _fresh_name(self, subject: str, taken: set[str]) -> str | None:
        for _ in range(self.MAX_NAME_ATTEMPTS):
            candidate = self.names.generate()
            if candidate not in taken:
                taken.add(candidate)
                return candidate
        self._skip(ErrorKind.NO_CANDIDATE, subject, f"no unused name after {self.MAX_NAME_ATTEMPTS} attempts")
        return None

    def _attach_superclass(self, decl: ClassDecl, pool: HierarchyPool, config: GeneratorConfig) -> ClassDecl | None:
        """Extend a random abstract class whose depth leaves room for one more level."""
        max_depth = config.inheritance_hierarchy.max
        eligible = []
        if max_depth > 0:
            for candidate in pool.abstract_classes():
                depth = pool.depth(candidate)
                if not depth.found:
                    self.diagnostics.report(depth.error, logger)
                    continue
                if depth.value + 1 <= max_depth:
                    eligible.append(candidate)

        if not eligible:
            self._skip(ErrorKind.NO_CANDIDATE, decl.name, "no eligible abstract superclass")
            return None

        superclass = self.rng.choice(eligible)
        decl.set_superclass(superclass.name)
        return superclass

    def _attach_interfaces(self, decl: ClassDecl, pool: HierarchyPool, config: GeneratorConfig) -> None:
        wanted = self._draw(config.interfaces)
        if wanted == 0:
            return
        available = pool.interfaces()
        if not available:
            self._skip(ErrorKind.NO_CANDIDATE, decl.name, "no interfaces in the pool")
            return
        for interface in self.rng.sample(available, min(wanted, len(available))):
            decl.add_interface(interface.name)

    def _discharge_obligations(
        self,
        decl: ClassDecl,
        superclass: ClassDecl | None,
        resolver: AbstractMethodResolver,
    ) -> None:
        signatures = []
        if superclass is not None and superclass.is_abstract:
            signatures = resolver.obligations(superclass)
        satisfied = resolver.inherited_concrete(superclass)
        for sig in resolver.interface_obligations(decl.interfaces, satisfied):
            if sig not in signatures:
                signatures.append(sig)
        resolver.discharge(decl, signatures, self.bodies, self.body_generator)

    def _add_fields_and_constructor(self, decl: ClassDecl, bounds: Range) -> None:
        """Private fields, and one constructor assigning each a literal."""
        taken = decl.field_names()
        assignments = []
        for _ in range(self._draw(bounds)):
            name = self._fresh_name(decl.name, taken)
            if name is None:
                continue
            field_type = self.field_types.choose()
            decl.add_field(FieldDecl(name=name, type_name=field_type))
            assignments.append(f"{INDENT}{name} = {self.literals.literal_for(field_type)};\n")

        constructor = ConstructorDecl(modifiers=Modifiers(Visibility.PUBLIC))
        key = MethodKey.for_constructor(decl.name, constructor)
        body = check_body(str(key), "{\n" + "".join(assignments) + "}\n")
        if not body.found:
            self.diagnostics.report(body.error, logger)
        decl.add_constructor(constructor)
        self.bodies.register(key, body.value if body.found else EMPTY_BODY)

    def _add_abstract_methods(self, decl: ClassDecl, bounds: Range, taken: set[str]) -> None:
        for _ in range(self._draw(bounds)):
            name = self._fresh_name(decl.name, taken)
            if name is None:
                continue
            decl.add_method(MethodDecl(name=name, modifiers=Modifiers(Visibility.PUBLIC, is_abstract=True)))

    def _add_concrete_methods(self, decl: ClassDecl, bounds: Range, taken: set[str]) -> None:
        for _ in range(self._draw(bounds)):
            name = self._fresh_name(decl.name, taken)
            if name is None:
                continue
            method = MethodDecl(name=name, modifiers=Modifiers(Visibility.PUBLIC))
            key = MethodKey.for_method(decl.name, method)
            body = check_body(str(key), self.body_generator.body_for(decl.name, name))
            if not body.found:
                self.diagnostics.report(body.error, logger)
                continue
            decl.add_method(method)
            self.bodies.register(key, body.value)
