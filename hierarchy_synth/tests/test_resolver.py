"""
Tests for AbstractMethodResolver and HierarchyPool chain queries.
"""

from __future__ import annotations

import pytest

from hierarchy_synth.pipeline import (
    AbstractMethodResolver,
    ClassDecl,
    DeclKind,
    Diagnostics,
    DuplicateClassError,
    ErrorKind,
    HierarchyPool,
    MethodBodyTable,
    MethodDecl,
    MethodKey,
    MethodSignature,
    Modifiers,
)


def decl(name, abstract=(), concrete=(), superclass=None, interfaces=(), is_abstract=True, kind=DeclKind.CLASS):
    d = ClassDecl(
        name=name,
        modifiers=Modifiers(is_abstract=is_abstract),
        kind=kind,
        superclass=superclass,
        interfaces=list(interfaces),
    )
    for method in abstract:
        d.add_method(MethodDecl(name=method, modifiers=Modifiers(is_abstract=True)))
    for method in concrete:
        d.add_method(MethodDecl(name=method))
    return d


def names(signatures: list[MethodSignature]) -> list[str]:
    return [s.name for s in signatures]


class FixedBody:
    def body_for(self, owner, method_name):
        return "{\n    int x = 1;\n}\n"


class TestObligations:
    def test_single_abstract_superclass(self):
        pool = HierarchyPool([decl("A", abstract=["foo", "bar"])])
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("A").value)) == ["foo", "bar"]

    def test_chain_order_nearest_first(self):
        pool = HierarchyPool(
            [
                decl("A", abstract=["alpha"]),
                decl("B", abstract=["beta"], superclass="A"),
                decl("C", abstract=["gamma"], superclass="B"),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("C").value)) == ["gamma", "beta", "alpha"]

    def test_implemented_lower_in_chain_is_not_an_obligation(self):
        pool = HierarchyPool(
            [
                decl("A", abstract=["foo", "bar"]),
                decl("B", concrete=["foo"], superclass="A"),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("B").value)) == ["bar"]

    def test_walk_stops_at_concrete_ancestor(self):
        pool = HierarchyPool(
            [
                decl("Root", abstract=["hidden"]),
                decl("Middle", concrete=["hidden"], superclass="Root", is_abstract=False),
                decl("Top", abstract=["visible"], superclass="Middle"),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("Top").value)) == ["visible"]

    def test_duplicates_collapse(self):
        pool = HierarchyPool(
            [
                decl("A", abstract=["foo"]),
                decl("B", abstract=["foo", "bar"], superclass="A"),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("B").value)) == ["foo", "bar"]

    def test_interfaces_of_abstract_ancestors_contribute(self):
        pool = HierarchyPool(
            [
                decl("Closeable", abstract=["close"], kind=DeclKind.INTERFACE),
                decl("A", abstract=["open"], interfaces=["Closeable"]),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.obligations(pool.lookup("A").value)) == ["open", "close"]

    def test_unresolvable_chain_means_no_obligations(self):
        diagnostics = Diagnostics()
        pool = HierarchyPool([decl("Orphan", abstract=["foo"], superclass="Missing")])
        resolver = AbstractMethodResolver(pool, diagnostics)

        assert resolver.obligations(pool.lookup("Orphan").value) == []
        assert [d.subject for d in diagnostics.of_kind(ErrorKind.NOT_FOUND)] == ["Missing"]


class TestInterfaceObligations:
    def test_super_interfaces_follow(self):
        pool = HierarchyPool(
            [
                decl("Base", abstract=["id"], kind=DeclKind.INTERFACE),
                decl("Named", abstract=["name"], interfaces=["Base"], kind=DeclKind.INTERFACE),
            ]
        )
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.interface_obligations(["Named"])) == ["name", "id"]

    def test_satisfied_signatures_dropped(self):
        pool = HierarchyPool([decl("I", abstract=["run", "stop"], kind=DeclKind.INTERFACE)])
        resolver = AbstractMethodResolver(pool)
        assert names(resolver.interface_obligations(["I"], {MethodSignature("run")})) == ["stop"]


class TestDischarge:
    def test_adds_concrete_overrides_with_bodies(self):
        pool = HierarchyPool()
        resolver = AbstractMethodResolver(pool)
        bodies = MethodBodyTable()
        target = ClassDecl(name="Impl")

        added = resolver.discharge(target, [MethodSignature("foo"), MethodSignature("bar")], bodies, FixedBody())

        assert [m.name for m in added] == ["foo", "bar"]
        assert all(not m.is_abstract for m in target.methods)
        assert bodies.get(MethodKey("Impl", "foo", 0)) == "{\n    int x = 1;\n}\n"

    def test_existing_method_not_duplicated(self):
        resolver = AbstractMethodResolver(HierarchyPool())
        target = ClassDecl(name="Impl", methods=[MethodDecl(name="foo")])
        added = resolver.discharge(target, [MethodSignature("foo")], MethodBodyTable(), FixedBody())
        assert added == []
        assert len(target.methods) == 1


class TestPool:
    def test_depth_counts_chain(self):
        pool = HierarchyPool([decl("A"), decl("B", superclass="A"), decl("C", superclass="B")])
        assert pool.depth(pool.lookup("A").value).value == 0
        assert pool.depth(pool.lookup("C").value).value == 2

    def test_object_is_the_implicit_root(self):
        pool = HierarchyPool([decl("A", superclass="java.lang.Object")])
        assert pool.depth(pool.lookup("A").value).value == 0

    def test_cycle_is_reported_not_followed(self):
        a = decl("A", superclass="B")
        b = decl("B", superclass="A")
        pool = HierarchyPool([a, b])
        depth = pool.depth(a)
        assert not depth.found
        assert depth.error.kind == ErrorKind.NOT_FOUND

    def test_lookup_missing(self):
        lookup = HierarchyPool().lookup("Nope")
        assert not lookup.found
        assert lookup.value is None

    def test_duplicate_rejected(self):
        pool = HierarchyPool([decl("A")])
        with pytest.raises(DuplicateClassError):
            pool.add(decl("A"))

    def test_rejected_duplicate_stays_mutable(self):
        pool = HierarchyPool([decl("A")])
        duplicate = decl("A")
        with pytest.raises(DuplicateClassError):
            pool.add(duplicate)
        assert not duplicate.frozen
        duplicate.add_method(MethodDecl(name="later"))
        assert pool.lookup("A").value is not duplicate


    def test_candidate_queries(self):
        pool = HierarchyPool(
            [
                decl("I", kind=DeclKind.INTERFACE),
                decl("A"),
                decl("K", is_abstract=False),
            ]
        )
        assert [d.name for d in pool.abstract_classes()] == ["A"]
        assert [d.name for d in pool.interfaces()] == ["I"]
        assert [d.name for d in pool] == ["I", "A", "K"]


if __name__ == "__main__":
    pytest.main([__file__])
