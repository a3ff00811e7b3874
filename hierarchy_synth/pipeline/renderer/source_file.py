"""
Java source files.

Wraps rendered declarations with the file prefix (generation comment and
package declaration) from the Jinja2 templates.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from ..decl_nodes import ClassDecl


class JavaSourceFile:
    """Assembles rendered declarations into a Java source file."""

    # Template directory name
    TEMPLATE_LANG = "java"

    # File extension
    FILE_EXTENSION = "java"

    def __init__(self, package: str = "", generation_comment: str = ""):
        self.package = package
        self.generation_comment = generation_comment
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")

    def file_name(self, decl: ClassDecl) -> str:
        return f"{decl.simple_name}.{self.FILE_EXTENSION}"

    def render(self, declarations: list[str]) -> str:
        """Prefix followed by the declarations, separated by blank lines."""
        prefix = self.prefix_template.render(
            generation_comment=self.generation_comment,
            package=self.package,
        )
        return prefix + "\n".join(declarations)
