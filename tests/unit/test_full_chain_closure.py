"""Tests for the full-chain closure traversal."""

import pytest

from servicemap.api.exceptions import ResultTooLargeError
from servicemap.models.base import ServiceDependency
from servicemap.topology.closure import build_adjacency, compute_full_chain, traverse


def _edge(src: str, dst: str) -> ServiceDependency:
    from_ns, from_name = src.split("/")
    to_ns, to_name = dst.split("/")
    return ServiceDependency(
        from_namespace=from_ns, from_name=from_name, to_namespace=to_ns, to_name=to_name
    )


# S1 -> S2 -> S3, S4 isolated from them, S5 <- S6 separate component
EDGES = [
    _edge("n1/s1", "n2/s2"),
    _edge("n2/s2", "n3/s3"),
    _edge("n6/s6", "n5/s5"),
]


class TestAdjacency:
    def test_undirected(self):
        adjacency = build_adjacency(EDGES)
        assert "n1::s1" in adjacency["n2::s2"]
        assert "n2::s2" in adjacency["n1::s1"]


class TestTraverse:
    def test_reaches_upstream_and_downstream(self):
        adjacency = build_adjacency(EDGES)
        assert traverse(["n3::s3"], adjacency) == {"n1::s1", "n2::s2", "n3::s3"}

    def test_seed_without_edges_is_kept(self):
        assert traverse(["n4::s4"], build_adjacency(EDGES)) == {"n4::s4"}

    def test_cycle_terminates(self):
        adjacency = build_adjacency([_edge("a/x", "b/y"), _edge("b/y", "a/x")])
        assert traverse(["a::x"], adjacency) == {"a::x", "b::y"}

    def test_cap_raises(self):
        adjacency = build_adjacency(EDGES)
        with pytest.raises(ResultTooLargeError) as exc_info:
            traverse(["n1::s1"], adjacency, max_services=2)
        assert exc_info.value.status_code == 413

    def test_cap_not_hit_at_exact_size(self):
        adjacency = build_adjacency(EDGES)
        assert len(traverse(["n1::s1"], adjacency, max_services=3)) == 3

    def test_long_chain(self):
        edges = [_edge(f"ns/s{i}", f"ns/s{i + 1}") for i in range(5000)]
        assert len(traverse(["ns::s0"], build_adjacency(edges))) == 5001


class TestComputeFullChain:
    def test_seeded_component_only(self):
        result = compute_full_chain(EDGES, seeds=["n1::s1"])
        assert result.services == {"n1::s1", "n2::s2", "n3::s3"}
        assert result.namespaces == {"n1", "n2", "n3"}
        assert result.service_count == 3
        assert not result.large_result

    def test_isolated_seed_keeps_its_namespace(self):
        result = compute_full_chain(EDGES, seeds=["n4::s4"])
        assert result.namespaces == {"n4"}

    def test_no_seeds_means_every_connected_service(self):
        result = compute_full_chain(EDGES)
        assert result.namespaces == {"n1", "n2", "n3", "n5", "n6"}

    def test_empty_seed_list_reaches_nothing(self):
        result = compute_full_chain(EDGES, seeds=[])
        assert result.services == frozenset()
        assert result.namespaces == frozenset()

    def test_large_result_flag(self):
        result = compute_full_chain(EDGES, seeds=["n1::s1"], warning_threshold=2)
        assert result.large_result

    def test_threshold_is_exclusive(self):
        result = compute_full_chain(EDGES, seeds=["n1::s1"], warning_threshold=3)
        assert not result.large_result
