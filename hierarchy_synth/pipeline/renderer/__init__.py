"""
Renderers turning declarations into Java source.
"""

from __future__ import annotations

from .java_renderer import JavaRenderer, simple_name
from .source_file import JavaSourceFile

__all__ = [
    "JavaRenderer",
    "JavaSourceFile",
    "simple_name",
]
