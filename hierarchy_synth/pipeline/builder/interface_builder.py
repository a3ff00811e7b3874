"""
Interface construction.

Interfaces only declare ``public abstract void`` methods; they are the
second kind of pool entry classes can attach to.
"""

from __future__ import annotations

import logging
import random

from ..config import GeneratorConfig
from ..decl_nodes import ClassDecl, DeclKind, MethodDecl, Modifiers, Visibility
from ..errors import Diagnostic, Diagnostics, DuplicateClassError, ErrorKind
from ..generators import NameGenerator
from ..pool import HierarchyPool

logger = logging.getLogger(__name__)


class InterfaceBuilder:
    """Builds interfaces into a ``HierarchyPool``."""

    MAX_NAME_ATTEMPTS = 100

    def __init__(self, rng: random.Random, names: NameGenerator, diagnostics: Diagnostics | None = None):
        self.rng = rng
        self.names = names
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def build(self, name: str, pool: HierarchyPool, config: GeneratorConfig) -> ClassDecl:
        if name in pool:
            raise DuplicateClassError(name)

        decl = ClassDecl(name=name, modifiers=Modifiers(Visibility.PUBLIC, is_abstract=True), kind=DeclKind.INTERFACE)
        taken = {decl.simple_name}
        count = self.rng.randint(config.interface_methods.min, config.interface_methods.max)
        for _ in range(count):
            method_name = next((n for n in (self.names.generate() for _ in range(self.MAX_NAME_ATTEMPTS)) if n not in taken), None)
            if method_name is None:
                self.diagnostics.report(Diagnostic(ErrorKind.NO_CANDIDATE, name, "no unused method name"), logger)
                continue
            taken.add(method_name)
            decl.add_method(MethodDecl(name=method_name, modifiers=Modifiers(Visibility.PUBLIC, is_abstract=True)))

        pool.add(decl)
        logger.debug("Built interface %s with %d methods", decl.name, len(decl.methods))
        return decl
