"""Tests for one-hop namespace expansion."""

from servicemap.models.base import NamespaceDependency
from servicemap.topology.expansion import build_namespace_maps, expand_namespaces


def _dep(src: str, dst: str) -> NamespaceDependency:
    return NamespaceDependency(from_namespace=src, to_namespace=dst)


CHAIN = [_dep("a", "b"), _dep("b", "c")]


class TestNamespaceMaps:
    def test_maps_both_directions(self):
        dependencies, dependents = build_namespace_maps(CHAIN)
        assert dependencies["a"] == {"b"}
        assert dependents["c"] == {"b"}
        assert "a" not in dependents


class TestExpandNamespaces:
    def test_adds_dependencies(self):
        assert expand_namespaces(frozenset({"a"}), CHAIN) == {"a", "b"}

    def test_adds_dependents(self):
        assert expand_namespaces(frozenset({"c"}), CHAIN) == {"b", "c"}

    def test_middle_gets_both_sides(self):
        assert expand_namespaces(frozenset({"b"}), CHAIN) == {"a", "b", "c"}

    def test_is_not_transitive(self):
        # a -> b -> c: selecting a must not reach c
        assert "c" not in expand_namespaces(frozenset({"a"}), CHAIN)

    def test_empty_selection_stays_empty(self):
        assert expand_namespaces(frozenset(), CHAIN) == frozenset()

    def test_unknown_namespace_kept(self):
        assert expand_namespaces(frozenset({"zzz"}), CHAIN) == {"zzz"}

    def test_self_loop(self):
        assert expand_namespaces(frozenset({"x"}), [_dep("x", "x")]) == {"x"}
