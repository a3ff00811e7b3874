"""
Builders for classes and interfaces.
"""

from __future__ import annotations

from .class_builder import ClassBuilder
from .interface_builder import InterfaceBuilder
from .resolver import AbstractMethodResolver

__all__ = [
    "AbstractMethodResolver",
    "ClassBuilder",
    "InterfaceBuilder",
]
