"""Dependency graph builder: runs the filter pipeline for one request.

Stages run strictly in sequence, each feeding the next:
namespace expansion → full-chain closure → topology query →
alert correlation → assembly.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from servicemap.api.exceptions import GraphTimeoutError, StoreUnavailableError, error_context
from servicemap.config.settings import Settings
from servicemap.models.base import DanglingEdgePolicy
from servicemap.topology.alerts import correlate_alerts
from servicemap.topology.assembler import GraphAssembler
from servicemap.topology.closure import ClosureResult, compute_full_chain
from servicemap.topology.expansion import expand_namespaces
from servicemap.topology.filters import GraphFilters
from servicemap.topology.models import GraphView
from servicemap.topology.store import ServiceScope, TopologyStore

logger = structlog.get_logger()

T = TypeVar("T")


class ServiceGraphBuilder:
    """Build filtered dependency graphs from a :class:`TopologyStore`.

    Parameters
    ----------
    store:
        Read-only topology store.
    warning_threshold:
        Full-chain service count above which the response is flagged as a
        large result set.
    max_services:
        Full-chain service count at which the build is aborted.
    timeout_seconds:
        Deadline for a whole build; ``None`` disables it.
    dangling_edge_policy:
        Passed to :class:`GraphAssembler`.
    """

    def __init__(
        self,
        store: TopologyStore,
        warning_threshold: int = 100,
        max_services: int | None = 10000,
        timeout_seconds: float | None = 30.0,
        dangling_edge_policy: DanglingEdgePolicy | str = DanglingEdgePolicy.DROP,
    ) -> None:
        self._store = store
        self._warning_threshold = warning_threshold
        self._max_services = max_services
        self._timeout = timeout_seconds
        self._assembler = GraphAssembler(DanglingEdgePolicy(dangling_edge_policy))

    @classmethod
    def from_settings(cls, store: TopologyStore, settings: Settings) -> ServiceGraphBuilder:
        return cls(
            store,
            warning_threshold=settings.graph_full_chain_warning_threshold,
            max_services=settings.graph_full_chain_max_services,
            timeout_seconds=settings.graph_build_timeout_seconds,
            dangling_edge_policy=settings.graph_dangling_edge_policy,
        )

    async def build(self, filters: GraphFilters) -> GraphView:
        """Build the graph for ``filters`` within the configured deadline."""
        try:
            async with asyncio.timeout(self._timeout):
                return await self._build(filters)
        except TimeoutError as exc:
            raise GraphTimeoutError(
                f"Graph build exceeded {self._timeout}s",
                extra={"timeout_seconds": self._timeout},
            ) from exc

    async def _fetch(self, what: str, call: Awaitable[T]) -> T:
        with error_context(StoreUnavailableError, detail=f"{what} query failed"):
            return await call

    async def _build(self, filters: GraphFilters) -> GraphView:
        start = time.monotonic()

        namespace_deps = await self._fetch(
            "namespace dependency", self._store.list_namespace_dependencies()
        )

        namespaces = filters.namespaces
        expanded: list[str] | None = None
        if filters.include_dependents:
            namespaces = expand_namespaces(namespaces, namespace_deps)
            expanded = sorted(namespaces)

        scope_namespaces: frozenset[str] | None = namespaces or None
        closure: ClosureResult | None = None
        if filters.show_full_chain:
            closure = await self._full_chain(scope_namespaces)
            scope_namespaces = closure.namespaces

        scope = ServiceScope(namespaces=scope_namespaces, tags=filters.tags, search=filters.search)
        services = await self._fetch("service", self._store.list_services(scope))
        keys = [(s.namespace, s.name) for s in services]

        dependencies = await self._fetch(
            "service dependency", self._store.list_dependencies_touching(keys)
        )
        alert_counts = await self._fetch(
            "alert",
            self._store.count_firing_alerts(keys, sorted(filters.severities) or None),
        )
        correlation = correlate_alerts(alert_counts, severity_filtered=filters.has_severity_filter)

        graph = self._assembler.assemble(services, correlation, dependencies, namespace_deps)

        view = GraphView(
            nodes=graph.nodes,
            edges=graph.edges,
            filters=filters,
            expanded_namespaces=expanded,
            show_full_chain=filters.show_full_chain,
            large_result_set=closure.large_result if closure else False,
            full_chain_services=closure.service_count if closure else None,
            dropped_edges=graph.dropped_edges,
        )
        logger.info(
            "graph_built",
            services_matched=len(services),
            nodes=len(view.nodes),
            edges=len(view.edges),
            dropped_edges=graph.dropped_edges,
            include_dependents=filters.include_dependents,
            show_full_chain=filters.show_full_chain,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return view

    async def _full_chain(self, namespaces: frozenset[str] | None) -> ClosureResult:
        edges = await self._fetch("service dependency", self._store.list_service_dependencies())
        seeds: list[str] | None = None
        if namespaces:
            seed_services = await self._fetch(
                "service", self._store.list_services(ServiceScope(namespaces=namespaces))
            )
            seeds = [s.key for s in seed_services]
        return compute_full_chain(
            edges,
            seeds=seeds,
            warning_threshold=self._warning_threshold,
            max_services=self._max_services,
        )
