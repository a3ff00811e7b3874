"""Random Class Hierarchy Generator

A Python package for generating random, structurally valid Java class
hierarchies: abstract classes, interfaces, fields, constructors and methods,
with every inherited abstract method overridden. Intended as test input for
compilers, decompilers and static analysis tools.
"""

__version__ = "1.0.1"

from .pipeline import (
    ClassBuilder,
    GeneratorConfig,
    HierarchyGenerator,
    HierarchyPool,
    JavaRenderer,
    MethodBodyTable,
    OutputMode,
)

__all__ = [
    "HierarchyGenerator",
    "GeneratorConfig",
    "OutputMode",
    "ClassBuilder",
    "HierarchyPool",
    "JavaRenderer",
    "MethodBodyTable",
]
