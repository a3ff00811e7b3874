"""
Atomic file writer for generated sources.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import OutputError
from .generators import count_braces

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate_java: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_java: Optional validation function for Java code
        """
        self._validate_java = validate_java or self._default_validate_java

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self._validate_java(content)

            temp_path.replace(path)
            logger.debug("Wrote %s", path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _default_validate_java(self, content: str) -> None:
        """Default Java validation.

        Raises:
            OutputError: If validation fails
        """
        # Basic structural checks, no parsing
        if "class " not in content and "interface " not in content:
            raise OutputError("Generated Java code has no type declarations")

        open_braces, close_braces = count_braces(content)
        if open_braces != close_braces:
            raise OutputError(f"Generated Java code has unbalanced braces: {open_braces} open, {close_braces} close")
