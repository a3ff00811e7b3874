"""
Hierarchy generator.

Runs a whole generation: interfaces first, then abstract classes (each one
may extend an earlier one), then concrete classes, all drawn from a single
seeded random source. The resulting pool can be rendered as one text or as
one source file per declaration.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .. import __version__
from ..cli_utils import reconstruct_command_line
from ..utils import snake_to_pascal_case
from .builder import ClassBuilder, InterfaceBuilder
from .config import GeneratorConfig, OutputMode
from .decl_nodes import ClassDecl, MethodBodyTable
from .errors import Diagnostics, OutputError
from .pool import HierarchyPool
from .renderer import JavaRenderer, JavaSourceFile
from .writer import AtomicWriter

logger = logging.getLogger(__name__)


class HierarchyGenerator:
    """Generates a pool of Java declarations and renders it."""

    def __init__(self, config: GeneratorConfig):
        config.validate()
        self.config = config
        self.diagnostics = Diagnostics()
        self.bodies = MethodBodyTable()
        self.pool = HierarchyPool()
        self.class_builder = ClassBuilder.seeded(config.seed, self.bodies, self.diagnostics)
        self.interface_builder = InterfaceBuilder(self.class_builder.rng, self.class_builder.names, self.diagnostics)
        self.renderer = JavaRenderer(self.diagnostics)
        self._built = False

    def _class_name(self) -> str:
        while True:
            name = snake_to_pascal_case(self.class_builder.names.generate())
            if name not in self.pool:
                return name

    def build(self) -> HierarchyPool:
        """Populate the pool once; later calls return the same pool."""
        if self._built:
            return self.pool

        for _ in range(self.config.interface_count):
            self.interface_builder.build(self._class_name(), self.pool, self.config)
        for _ in range(self.config.abstract_classes):
            self.class_builder.build(self._class_name(), self.pool, self.config, abstract=True)
        for _ in range(self.config.concrete_classes):
            self.class_builder.build(self._class_name(), self.pool, self.config, abstract=False)

        self._built = True
        logger.info(
            "Generated %d declarations (%d diagnostics)",
            len(self.pool),
            len(self.diagnostics),
        )
        return self.pool

    def render(self, decl: ClassDecl) -> str:
        return self.renderer.render(decl, self.bodies)

    def generate(self) -> str:
        """All declarations as a single text."""
        self.build()
        source = JavaSourceFile(self.config.package, self._generate_command_comment())
        return source.render([self.render(decl) for decl in self.pool])

    def source_files(self) -> dict[str, str]:
        """File name -> content, one public declaration per file."""
        self.build()
        source = JavaSourceFile(self.config.package, self._generate_command_comment())
        return {source.file_name(decl): source.render([self.render(decl)]) for decl in self.pool}

    def write(self, output_dir: Path, mode: OutputMode = OutputMode.ERROR_IF_EXISTS) -> list[Path]:
        """Write one ``.java`` file per declaration into ``output_dir``."""
        writer = AtomicWriter()
        files = {output_dir / name: content for name, content in self.source_files().items()}
        if mode == OutputMode.ERROR_IF_EXISTS:
            existing = sorted(str(path) for path in files if path.exists())
            if existing:
                raise OutputError(f"Output files already exist: {', '.join(existing)}. Use --force to overwrite.")

        written = []
        for path, content in files.items():
            writer.write(path, content)
            written.append(path)
        logger.info("Wrote %d files to %s", len(written), output_dir)
        return written

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated files"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ..hierarchy_synth import hierarchy_synth as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "hierarchy_synth"

        return f"// Generated by hierarchy_synth v{__version__} : {command_line}"
