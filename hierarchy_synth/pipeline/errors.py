"""
Errors and lookup results for the hierarchy pipeline.

Recoverable failures (a missing ancestor, a rejected body, an empty candidate
set) never raise: query sites return a ``Lookup`` and callers record a
``Diagnostic`` before skipping the step. Exceptions are kept for misuse of the
API, such as an invalid configuration or mutating a frozen declaration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of recoverable failures."""

    NOT_FOUND = "not_found"  # a type, class or method could not be resolved
    BODY_SYNTHESIS_FAILED = "body_synthesis_failed"  # a body was rejected
    NO_CANDIDATE = "no_candidate"  # nothing eligible for a superclass/interface/name slot


@dataclass(frozen=True)
class Diagnostic:
    """A recovered failure, kept for reporting."""

    kind: ErrorKind
    subject: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.subject}: {self.message}"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Result of a query that may not resolve."""

    value: T | None = None
    error: Diagnostic | None = None

    @property
    def found(self) -> bool:
        return self.error is None

    @staticmethod
    def ok(value: T) -> Lookup[T]:
        return Lookup(value=value)

    @staticmethod
    def not_found(subject: str, message: str) -> Lookup[T]:
        return Lookup(error=Diagnostic(ErrorKind.NOT_FOUND, subject, message))


@dataclass
class Diagnostics:
    """Collects diagnostics emitted during building and rendering."""

    items: list[Diagnostic] = field(default_factory=list)

    def report(self, diagnostic: Diagnostic, logger: logging.Logger | None = None) -> None:
        self.items.append(diagnostic)
        if logger is not None:
            # Missing candidates are routine for a fresh pool
            level = logging.DEBUG if diagnostic.kind == ErrorKind.NO_CANDIDATE else logging.WARNING
            logger.log(level, "%s", diagnostic)

    def of_kind(self, kind: ErrorKind) -> list[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


class HierarchySynthError(Exception):
    """Base exception for all hierarchy_synth errors."""

    pass


class ConfigError(HierarchySynthError):
    """Raised when a generator configuration is invalid."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Invalid configuration for '{key}': {reason}")


class FrozenDeclError(HierarchySynthError):
    """Raised when a frozen declaration is mutated."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Declaration '{name}' is frozen and cannot be modified")


class DuplicateClassError(HierarchySynthError):
    """Raised when a class name is already present in the pool."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Class '{name}' is already registered in the pool")


class OutputError(HierarchySynthError):
    """Raised when generated output cannot be written.

    This can happen when:
    - The target file already exists and overwriting is not allowed
    - The rendered source fails the structural check before writing
    """

    pass
