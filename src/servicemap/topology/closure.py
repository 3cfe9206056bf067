"""Full-chain closure: every service transitively connected to a seed set.

Dependency direction is ignored, so the result is the union of the
connected components containing the seeds.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Iterable

import structlog
from pydantic import BaseModel

from servicemap.api.exceptions import ResultTooLargeError
from servicemap.models.base import ServiceDependency, split_service_key

logger = structlog.get_logger()


class ClosureResult(BaseModel):
    """Outcome of one closure traversal."""

    services: frozenset[str]
    namespaces: frozenset[str]
    large_result: bool = False

    @property
    def service_count(self) -> int:
        return len(self.services)


def build_adjacency(edges: Iterable[ServiceDependency]) -> dict[str, set[str]]:
    """Undirected adjacency over service keys."""
    adjacency: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        adjacency[edge.from_key].add(edge.to_key)
        adjacency[edge.to_key].add(edge.from_key)
    return adjacency


def traverse(
    seeds: Iterable[str],
    adjacency: dict[str, set[str]],
    max_services: int | None = None,
) -> set[str]:
    """Breadth-first traversal from all seeds at once.

    Raises :class:`ResultTooLargeError` as soon as more than ``max_services``
    services have been reached.
    """
    visited: set[str] = set()
    queue: deque[str] = deque()

    def _visit(key: str) -> None:
        visited.add(key)
        queue.append(key)
        if max_services is not None and len(visited) > max_services:
            raise ResultTooLargeError(
                f"Full dependency chain exceeds {max_services} services",
                extra={"max_services": max_services},
            )

    for seed in seeds:
        if seed not in visited:
            _visit(seed)

    while queue:
        current = queue.popleft()
        for neighbour in adjacency.get(current, ()):
            if neighbour not in visited:
                _visit(neighbour)
    return visited


def compute_full_chain(
    edges: Iterable[ServiceDependency],
    seeds: Iterable[str] | None = None,
    warning_threshold: int = 100,
    max_services: int | None = None,
) -> ClosureResult:
    """Close ``seeds`` over the undirected dependency graph.

    With ``seeds`` of ``None`` every service that appears on any edge is a
    seed. The returned namespaces replace the namespace filter downstream.
    """
    adjacency = build_adjacency(edges)
    seed_keys = list(adjacency) if seeds is None else list(seeds)

    visited = traverse(seed_keys, adjacency, max_services=max_services)
    namespaces = frozenset(split_service_key(key)[0] for key in visited)
    large = len(visited) > warning_threshold

    if large:
        logger.warning(
            "full_chain_large_result",
            services=len(visited),
            threshold=warning_threshold,
        )
    logger.debug(
        "full_chain_computed",
        seeds=len(seed_keys),
        services=len(visited),
        namespaces=len(namespaces),
    )
    return ClosureResult(services=frozenset(visited), namespaces=namespaces, large_result=large)
