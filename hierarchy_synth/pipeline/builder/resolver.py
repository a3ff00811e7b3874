"""
Abstract method obligations.

A class extending an abstract superclass must override every abstract method
it inherits that no class nearer to it already implements. The same holds
for the methods of the interfaces it, or its abstract ancestors, implement.
"""

from __future__ import annotations

import logging

from ..decl_nodes import ClassDecl, MethodBodyTable, MethodDecl, MethodKey, MethodSignature, Modifiers
from ..errors import Diagnostics
from ..generators import BodyGenerator, check_body
from ..pool import HierarchyPool

logger = logging.getLogger(__name__)

EMPTY_BODY = "{\n}\n"


class AbstractMethodResolver:
    """Computes and discharges inherited abstract methods."""

    def __init__(self, pool: HierarchyPool, diagnostics: Diagnostics | None = None):
        self.pool = pool
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def _abstract_chain(self, superclass: ClassDecl) -> list[ClassDecl] | None:
        """``superclass`` and its ancestors up to the first concrete one."""
        ancestors = self.pool.ancestors(superclass)
        if not ancestors.found:
            self.diagnostics.report(ancestors.error, logger)
            return None
        chain = []
        for decl in [superclass, *ancestors.value]:
            if not decl.is_abstract:
                break
            chain.append(decl)
        return chain

    def obligations(self, superclass: ClassDecl) -> list[MethodSignature]:
        """Abstract methods a subclass of ``superclass`` must override.

        Walks the superclass chain nearest first, stopping at the first
        concrete ancestor. Signatures implemented concretely lower in the
        chain are dropped. Interfaces implemented by the abstract ancestors
        contribute after the chain. If any part of the chain cannot be
        resolved, there are no obligations.
        """
        chain = self._abstract_chain(superclass)
        if chain is None:
            return []

        implemented: set[MethodSignature] = set()
        result: list[MethodSignature] = []
        pending_interfaces: list[str] = []
        for decl in chain:
            for method in decl.methods:
                sig = method.signature
                if not method.is_abstract:
                    implemented.add(sig)
                elif sig not in implemented and sig not in result:
                    result.append(sig)
            pending_interfaces.extend(name for name in decl.interfaces if name not in pending_interfaces)

        satisfied = implemented | self.inherited_concrete(superclass)
        for sig in self.interface_obligations(pending_interfaces, satisfied):
            if sig not in result:
                result.append(sig)
        return result

    def inherited_concrete(self, superclass: ClassDecl | None) -> set[MethodSignature]:
        """Signatures implemented concretely anywhere in the superclass chain."""
        if superclass is None:
            return set()
        ancestors = self.pool.ancestors(superclass)
        chain = [superclass, *(ancestors.value or [])]
        return {m.signature for decl in chain for m in decl.methods if not m.is_abstract}

    def interface_obligations(
        self,
        interface_names: list[str],
        satisfied: set[MethodSignature] | None = None,
    ) -> list[MethodSignature]:
        """Methods of the named interfaces and their super-interfaces, in order."""
        satisfied = satisfied or set()
        result: list[MethodSignature] = []
        for interface in self._interface_closure(interface_names, report=True):
            for method in interface.methods:
                sig = method.signature
                if method.is_abstract and sig not in satisfied and sig not in result:
                    result.append(sig)
        return result

    def inherited_method_names(self, superclass: ClassDecl | None, interface_names: list[str]) -> set[str]:
        """Every method name visible through the superclass chain and interfaces."""
        names: set[str] = set()
        if superclass is not None:
            ancestors = self.pool.ancestors(superclass)
            for decl in [superclass, *(ancestors.value or [])]:
                names.update(decl.method_names())
        for interface in self._interface_closure(interface_names, report=False):
            names.update(interface.method_names())
        return names

    def _interface_closure(self, interface_names: list[str], report: bool) -> list[ClassDecl]:
        """The named interfaces followed by their super-interfaces, breadth first."""
        result = []
        visited: set[str] = set()
        queue = list(interface_names)
        while queue:
            name = queue.pop(0)
            if name in visited:
                continue
            visited.add(name)
            interface = self.pool.lookup(name)
            if not interface.found:
                if report:
                    self.diagnostics.report(interface.error, logger)
                continue
            result.append(interface.value)
            queue.extend(interface.value.interfaces)
        return result

    def discharge(
        self,
        decl: ClassDecl,
        signatures: list[MethodSignature],
        bodies: MethodBodyTable,
        body_generator: BodyGenerator,
    ) -> list[MethodDecl]:
        """Add one concrete override per signature to ``decl``.

        A generated body that fails the structural check is replaced by an
        empty block; the override itself is always added.
        """
        added = []
        for sig in signatures:
            if decl.find_method(sig) is not None:
                continue
            method = MethodDecl(name=sig.name, modifiers=Modifiers())
            key = MethodKey.for_method(decl.name, method)
            body = check_body(str(key), body_generator.body_for(decl.name, sig.name))
            if not body.found:
                self.diagnostics.report(body.error, logger)
            decl.add_method(method)
            bodies.register(key, body.value if body.found else EMPTY_BODY)
            added.append(method)
        logger.debug("%s: discharged %d obligations", decl.name, len(added))
        return added
