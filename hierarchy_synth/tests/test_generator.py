"""
End-to-end tests for HierarchyGenerator: invariants that must hold for
every generated class, reproducibility, and file output.
"""

from __future__ import annotations

import pytest

from hierarchy_synth.pipeline import (
    AbstractMethodResolver,
    AtomicWriter,
    Bound,
    ClassDecl,
    GeneratorConfig,
    HierarchyGenerator,
    HierarchyPool,
    JavaRenderer,
    MethodKey,
    MethodSignature,
    OutputError,
    OutputMode,
    Range,
)
from hierarchy_synth.pipeline.decl_nodes import CONSTRUCTOR_NAME


def busy_config(seed: int) -> GeneratorConfig:
    config = GeneratorConfig()
    config.seed = seed
    config.inheritance_hierarchy = Bound(3)
    config.fields = Range(1, 4)
    config.abstract_methods = Range(1, 3)
    config.concrete_methods = Range(0, 2)
    config.interfaces = Range(0, 2)
    config.interface_methods = Range(1, 3)
    config.interface_count = 3
    config.abstract_classes = 12
    config.concrete_classes = 4
    config.add_generation_comment = False
    return config


def unimplemented(pool: HierarchyPool, decl: ClassDecl) -> set[MethodSignature]:
    """Inherited abstract signatures with no concrete implementation in reach."""
    chain = [decl, *pool.ancestors(decl).value]
    concrete = {m.signature for d in chain for m in d.methods if not m.is_abstract}

    required: set[MethodSignature] = set()
    interface_names = list(decl.interfaces)
    for ancestor in chain[1:]:
        if not ancestor.is_abstract:
            break
        required.update(m.signature for m in ancestor.abstract_methods())
        interface_names.extend(ancestor.interfaces)
    resolver = AbstractMethodResolver(pool)
    required.update(resolver.interface_obligations(interface_names))
    return required - concrete


SEEDS = [0, 1, 2, 3, 4, 5, 6, 7]


@pytest.mark.parametrize("seed", SEEDS)
def test_generated_classes_respect_configuration(seed):
    config = busy_config(seed)
    generator = HierarchyGenerator(config)
    pool = generator.build()
    resolver = AbstractMethodResolver(pool)

    classes = [d for d in pool if not d.is_interface]
    assert len(classes) == config.abstract_classes + config.concrete_classes
    assert len(pool.interfaces()) == config.interface_count

    for decl in classes:
        assert config.fields.min <= len(decl.fields) <= config.fields.max
        if decl.is_abstract:
            assert config.abstract_methods.min <= len(decl.abstract_methods()) <= config.abstract_methods.max
        else:
            assert decl.abstract_methods() == []

        superclass = pool.lookup(decl.superclass).value if decl.has_superclass else None
        inherited = resolver.inherited_method_names(superclass, decl.interfaces)
        fresh = [m for m in decl.concrete_methods() if m.name not in inherited]
        assert config.concrete_methods.min <= len(fresh) <= config.concrete_methods.max

        assert pool.depth(decl).value <= config.inheritance_hierarchy.max


@pytest.mark.parametrize("seed", SEEDS)
def test_no_missing_overrides(seed):
    generator = HierarchyGenerator(busy_config(seed))
    pool = generator.build()
    for decl in pool:
        if not decl.is_interface:
            assert unimplemented(pool, decl) == set(), decl.name


@pytest.mark.parametrize("seed", SEEDS)
def test_constructor_assigns_only_declared_fields(seed):
    generator = HierarchyGenerator(busy_config(seed))
    for decl in generator.build():
        if decl.is_interface:
            assert decl.constructors == ()
            continue
        body = generator.bodies.get(MethodKey(decl.name, CONSTRUCTOR_NAME, 0))
        assigned = [line.split()[0] for line in body.splitlines()[1:-1]]
        assert assigned == [f.name for f in decl.fields]


def test_hierarchy_reaches_depth_limit():
    config = busy_config(0)
    config.abstract_classes = 30
    pool = HierarchyGenerator(config).build()
    depths = [pool.depth(d).value for d in pool.abstract_classes()]
    assert max(depths) == config.inheritance_hierarchy.max


def test_same_seed_same_output():
    assert HierarchyGenerator(busy_config(11)).generate() == HierarchyGenerator(busy_config(11)).generate()


def test_different_seed_different_output():
    assert HierarchyGenerator(busy_config(11)).generate() != HierarchyGenerator(busy_config(12)).generate()


def test_render_twice_identical():
    generator = HierarchyGenerator(busy_config(13))
    renderer = JavaRenderer()
    for decl in generator.build():
        assert renderer.render(decl, generator.bodies) == renderer.render(decl, generator.bodies)


def test_build_is_idempotent():
    generator = HierarchyGenerator(busy_config(14))
    first = generator.build()
    assert generator.build() is first
    assert len(first) == 3 + 12 + 4


def test_generation_comment_and_package():
    config = busy_config(15)
    config.add_generation_comment = True
    config.package = "com.example.gen"
    text = HierarchyGenerator(config).generate()
    assert text.startswith("// Generated by hierarchy_synth v")
    assert "\n\npackage com.example.gen;\n\n" in text


def test_source_files_one_declaration_each():
    generator = HierarchyGenerator(busy_config(16))
    files = generator.source_files()
    assert len(files) == len(generator.pool)
    for decl in generator.pool:
        content = files[f"{decl.simple_name}.java"]
        assert f" {decl.kind.value} {decl.simple_name}" in content
        assert content.count(" class ") + content.count(" interface ") == 1


class TestWrite:
    def test_writes_java_files(self, tmp_path):
        generator = HierarchyGenerator(busy_config(17))
        written = generator.write(tmp_path / "out")
        assert len(written) == len(generator.pool)
        for path in written:
            assert path.suffix == ".java"
            assert path.read_text() == generator.source_files()[path.name]

    def test_existing_files_rejected_without_force(self, tmp_path):
        HierarchyGenerator(busy_config(18)).write(tmp_path)
        with pytest.raises(OutputError, match="already exist"):
            HierarchyGenerator(busy_config(18)).write(tmp_path)

    def test_force_overwrites(self, tmp_path):
        HierarchyGenerator(busy_config(19)).write(tmp_path)
        written = HierarchyGenerator(busy_config(19)).write(tmp_path, OutputMode.FORCE)
        assert written
        assert not list(tmp_path.glob(".*.tmp"))

    def test_brace_literal_passes_validation(self, tmp_path):
        path = tmp_path / "C.java"
        content = "public class C {\n    private char c = '{';\n}\n"
        AtomicWriter().write(path, content)
        assert path.read_text() == content

    def test_unbalanced_content_rejected(self, tmp_path):
        path = tmp_path / "C.java"
        with pytest.raises(OutputError, match="unbalanced"):
            AtomicWriter().write(path, "public class C {\n    {\n}\n")
        assert not path.exists()
        assert not list(tmp_path.iterdir())


if __name__ == "__main__":
    pytest.main([__file__])
