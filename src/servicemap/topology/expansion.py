"""One-hop namespace expansion over namespace-level dependencies."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

import structlog

from servicemap.models.base import NamespaceDependency

logger = structlog.get_logger()


def build_namespace_maps(
    edges: Iterable[NamespaceDependency],
) -> tuple[dict[str, set[str]], dict[str, set[str]]]:
    """Return (dependencies, dependents) adjacency maps for namespace edges."""
    dependencies: dict[str, set[str]] = defaultdict(set)
    dependents: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        dependencies[edge.from_namespace].add(edge.to_namespace)
        dependents[edge.to_namespace].add(edge.from_namespace)
    return dependencies, dependents


def expand_namespaces(
    namespaces: frozenset[str],
    edges: Iterable[NamespaceDependency],
) -> frozenset[str]:
    """Add every namespace one hop away from ``namespaces``, in either direction.

    Namespaces that a selected one depends on are added, and so are the
    namespaces depending on a selected one (its blast radius). Expansion is
    not transitive. An empty selection expands to nothing.
    """
    if not namespaces:
        return namespaces

    dependencies, dependents = build_namespace_maps(edges)
    expanded = set(namespaces)
    for ns in namespaces:
        expanded.update(dependencies.get(ns, ()))
        expanded.update(dependents.get(ns, ()))

    logger.debug(
        "namespaces_expanded",
        selected=sorted(namespaces),
        added=sorted(expanded - namespaces),
    )
    return frozenset(expanded)
