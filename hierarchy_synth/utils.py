"""
Utility functions for the hierarchy generator.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def snake_to_pascal_case(text: str) -> str:
    """Convert a generated identifier to a Java class name.

    Examples:
        "bofaku" -> "Bofaku"
        "tila_rome" -> "TilaRome"
        "kevoZadu" -> "KevoZadu"

    Args:
        text: snake_case, camelCase or lowercase identifier

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    return "".join(word.capitalize() for word in words if word)
