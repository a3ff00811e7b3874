"""
Pool of previously generated declarations.

The pool is append-only for the duration of a run. New classes choose their
superclass and interfaces from it, and every name-based reference in a
``ClassDecl`` is resolved here.
"""

from __future__ import annotations

import threading

from .decl_nodes import ClassDecl
from .errors import DuplicateClassError, Lookup


class HierarchyPool:
    """Append-only registry of frozen class and interface declarations.

    Appends are serialized by a lock and reads work on snapshots, so
    candidate selection never observes a half-registered class.
    """

    def __init__(self, decls: list[ClassDecl] | None = None):
        self._lock = threading.Lock()
        self._decls: dict[str, ClassDecl] = {}
        for decl in decls or []:
            self.add(decl)

    def add(self, decl: ClassDecl) -> None:
        """Register a declaration and freeze it."""
        with self._lock:
            if decl.name in self._decls:
                raise DuplicateClassError(decl.name)
            self._decls[decl.name] = decl.freeze()

    def lookup(self, name: str) -> Lookup[ClassDecl]:
        with self._lock:
            decl = self._decls.get(name)
        if decl is None:
            return Lookup.not_found(name, "not registered in the pool")
        return Lookup.ok(decl)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._decls

    def __len__(self) -> int:
        with self._lock:
            return len(self._decls)

    def __iter__(self):
        return iter(self.snapshot())

    def snapshot(self) -> list[ClassDecl]:
        """All declarations in registration order."""
        with self._lock:
            return list(self._decls.values())

    def abstract_classes(self) -> list[ClassDecl]:
        return [d for d in self.snapshot() if not d.is_interface and d.is_abstract]

    def interfaces(self) -> list[ClassDecl]:
        return [d for d in self.snapshot() if d.is_interface]

    def ancestors(self, decl: ClassDecl) -> Lookup[list[ClassDecl]]:
        """Superclass chain of ``decl``, nearest first.

        Fails when a superclass name is not registered or the chain loops
        back on itself.
        """
        chain: list[ClassDecl] = []
        seen = {decl.name}
        current = decl
        while current.has_superclass:
            if current.superclass in seen:
                return Lookup.not_found(current.superclass, f"cycle in superclass chain of {decl.name}")
            parent = self.lookup(current.superclass)
            if not parent.found:
                return Lookup(value=None, error=parent.error)
            seen.add(current.superclass)
            chain.append(parent.value)
            current = parent.value
        return Lookup.ok(chain)

    def depth(self, decl: ClassDecl) -> Lookup[int]:
        """Length of the superclass chain up to the implicit root."""
        chain = self.ancestors(decl)
        if not chain.found:
            return Lookup(error=chain.error)
        return Lookup.ok(len(chain.value))
