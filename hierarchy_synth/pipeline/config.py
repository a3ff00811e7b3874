"""
Configuration for the hierarchy generator.

Bounds are inclusive. The JSON form uses the camelCase keys of the
configuration files shipped with earlier generators
(``inheritanceHierarchy``, ``abstractMethods``...), the Python attributes are
snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import ConfigError


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class Range:
    """Inclusive ``[min, max]`` range."""

    min: int = 0
    max: int = 0

    @staticmethod
    def from_dict(d: dict) -> Range:
        return Range(min=int(d.get("min", 0)), max=int(d.get("max", 0)))

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class Bound:
    """Single inclusive upper bound."""

    max: int = 0

    @staticmethod
    def from_dict(d: dict) -> Bound:
        return Bound(max=int(d.get("max", 0)))

    def to_dict(self) -> dict:
        return {"max": self.max}


# JSON key -> attribute name
_RANGE_KEYS = {
    "fields": "fields",
    "abstractMethods": "abstract_methods",
    "concreteMethods": "concrete_methods",
    "interfaces": "interfaces",
    "interfaceMethods": "interface_methods",
}

_COUNT_KEYS = {
    "abstractClasses": "abstract_classes",
    "concreteClasses": "concrete_classes",
    "interfaceCount": "interface_count",
}


@dataclass
class GeneratorConfig:
    """Configuration options for hierarchy generation."""

    # Longest superclass chain a generated class may have
    inheritance_hierarchy: Bound = field(default_factory=lambda: Bound(max=3))

    # Per-class member counts
    fields: Range = field(default_factory=lambda: Range(0, 3))
    abstract_methods: Range = field(default_factory=lambda: Range(0, 2))
    concrete_methods: Range = field(default_factory=lambda: Range(0, 2))

    # Interfaces implemented per class
    interfaces: Range = field(default_factory=lambda: Range(0, 1))

    # Methods declared per generated interface
    interface_methods: Range = field(default_factory=lambda: Range(1, 2))

    # Number of declarations produced by a run
    abstract_classes: int = 5
    concrete_classes: int = 0
    interface_count: int = 2

    # Seed for every random collaborator (None = nondeterministic)
    seed: int | None = None

    # Package declaration for written source files (empty = default package)
    package: str = ""

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "inheritanceHierarchy":
                config.inheritance_hierarchy = Bound.from_dict(v)
            elif k in _RANGE_KEYS:
                setattr(config, _RANGE_KEYS[k], Range.from_dict(v))
            elif k in _COUNT_KEYS:
                setattr(config, _COUNT_KEYS[k], int(v))
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        d: dict = {"inheritanceHierarchy": self.inheritance_hierarchy.to_dict()}
        for key, attr in _RANGE_KEYS.items():
            d[key] = getattr(self, attr).to_dict()
        for key, attr in _COUNT_KEYS.items():
            d[key] = getattr(self, attr)
        d["seed"] = self.seed
        d["package"] = self.package
        d["add_generation_comment"] = self.add_generation_comment
        return d

    def validate(self) -> None:
        """Check bounds, raising ConfigError on the first violation."""
        if self.inheritance_hierarchy.max < 0:
            raise ConfigError("inheritanceHierarchy", "max must be non-negative")
        for key, attr in _RANGE_KEYS.items():
            r: Range = getattr(self, attr)
            if r.min < 0:
                raise ConfigError(key, "min must be non-negative")
            if r.min > r.max:
                raise ConfigError(key, f"min ({r.min}) is greater than max ({r.max})")
        for key, attr in _COUNT_KEYS.items():
            if getattr(self, attr) < 0:
                raise ConfigError(key, "count must be non-negative")
