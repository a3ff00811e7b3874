"""
Pipeline - random class hierarchy generator.

Generation runs in four phases:

1. Phase 1 (Interfaces): Build interfaces into the hierarchy pool
2. Phase 2 (Classes): Build classes, each extending and implementing pool
   members and overriding every inherited abstract method
3. Phase 3 (Renderer): Render each declaration as Java source
4. Phase 4 (Writer): Optionally write one source file per declaration
"""

from __future__ import annotations

from .builder import AbstractMethodResolver, ClassBuilder, InterfaceBuilder
from .config import Bound, GeneratorConfig, OutputMode, Range
from .decl_nodes import (
    ClassDecl,
    ConstructorDecl,
    DeclKind,
    FieldDecl,
    MethodBodyTable,
    MethodDecl,
    MethodKey,
    MethodSignature,
    Modifiers,
    PrimitiveType,
    Visibility,
)
from .errors import (
    ConfigError,
    Diagnostic,
    Diagnostics,
    DuplicateClassError,
    ErrorKind,
    FrozenDeclError,
    HierarchySynthError,
    Lookup,
    OutputError,
)
from .generator import HierarchyGenerator
from .pool import HierarchyPool
from .renderer import JavaRenderer, JavaSourceFile
from .writer import AtomicWriter

__all__ = [
    "AbstractMethodResolver",
    "AtomicWriter",
    "Bound",
    "ClassBuilder",
    "ClassDecl",
    "ConfigError",
    "ConstructorDecl",
    "DeclKind",
    "Diagnostic",
    "Diagnostics",
    "DuplicateClassError",
    "ErrorKind",
    "FieldDecl",
    "FrozenDeclError",
    "GeneratorConfig",
    "HierarchyGenerator",
    "HierarchyPool",
    "HierarchySynthError",
    "InterfaceBuilder",
    "JavaRenderer",
    "JavaSourceFile",
    "Lookup",
    "MethodBodyTable",
    "MethodDecl",
    "MethodKey",
    "MethodSignature",
    "Modifiers",
    "OutputError",
    "OutputMode",
    "PrimitiveType",
    "Range",
    "Visibility",
]
