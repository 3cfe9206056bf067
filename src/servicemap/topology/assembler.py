"""Graph assembly: turns matched services, edges and alert state into a view."""

from __future__ import annotations

from collections.abc import Iterable

import structlog
from pydantic import BaseModel, Field

from servicemap.models.base import (
    DanglingEdgePolicy,
    NamespaceDependency,
    Service,
    ServiceDependency,
    split_service_key,
)
from servicemap.topology.alerts import AlertCorrelation, surviving_services
from servicemap.topology.models import (
    ContainmentEdge,
    GraphEdge,
    GraphNode,
    NamespaceEdge,
    NamespaceNode,
    PlaceholderNode,
    ServiceEdge,
    ServiceNode,
    namespace_edge_id,
    service_edge_id,
)

logger = structlog.get_logger()


class AssembledGraph(BaseModel):
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    dropped_edges: int = 0


class GraphAssembler:
    """Emit deduplicated nodes and edges for one graph build.

    All dedup state lives inside :meth:`assemble`, so one assembler can be
    shared between concurrent requests.

    Parameters
    ----------
    dangling_edge_policy:
        How to treat a service edge whose far endpoint is not an emitted
        service node: ``drop`` omits the edge, ``placeholder`` keeps it and
        emits a minimal placeholder node for the missing endpoint.
    """

    def __init__(self, dangling_edge_policy: DanglingEdgePolicy = DanglingEdgePolicy.DROP) -> None:
        self._policy = DanglingEdgePolicy(dangling_edge_policy)

    @property
    def dangling_edge_policy(self) -> DanglingEdgePolicy:
        return self._policy

    def assemble(
        self,
        services: Iterable[Service],
        correlation: AlertCorrelation,
        service_dependencies: Iterable[ServiceDependency],
        namespace_dependencies: Iterable[NamespaceDependency],
    ) -> AssembledGraph:
        nodes: list[GraphNode] = []
        edges: list[GraphEdge] = []
        namespaces: set[str] = set()
        service_ids: set[str] = set()

        # Namespace and service nodes, plus containment edges
        for service in surviving_services(services, correlation):
            if service.namespace not in namespaces:
                namespaces.add(service.namespace)
                nodes.append(NamespaceNode(id=service.namespace, label=service.namespace))
            if service.key in service_ids:
                continue
            service_ids.add(service.key)
            summary = correlation.summary_for(service.key)
            nodes.append(
                ServiceNode(
                    id=service.key,
                    label=service.name,
                    namespace=service.namespace,
                    team=service.team,
                    environment=service.environment,
                    component_type=service.component_type,
                    tags=list(service.tags),
                    tag_sources=dict(service.tag_sources),
                    external_calls=service.external_calls,
                    database_calls=service.database_calls,
                    rpc_calls=service.rpc_calls,
                    alert_count=summary.alert_count,
                    highest_severity=summary.highest_severity,
                )
            )
            edges.append(ContainmentEdge(source=service.namespace, target=service.key))

        # Service dependency edges
        edge_ids: set[str] = set()
        placeholder_ids: set[str] = set()
        dropped_ids: set[str] = set()
        for dep in service_dependencies:
            edge_id = service_edge_id(dep.from_key, dep.to_key)
            if edge_id in edge_ids or edge_id in dropped_ids:
                continue
            missing = [k for k in (dep.from_key, dep.to_key) if k not in service_ids]
            if missing and self._policy is DanglingEdgePolicy.DROP:
                dropped_ids.add(edge_id)
                continue
            for key in missing:
                if key not in placeholder_ids:
                    placeholder_ids.add(key)
                    namespace, name = split_service_key(key)
                    nodes.append(PlaceholderNode(id=key, label=name, namespace=namespace))
            edge_ids.add(edge_id)
            edges.append(ServiceEdge(id=edge_id, source=dep.from_key, target=dep.to_key))

        # Namespace dependency edges between emitted namespaces only
        for ns_dep in namespace_dependencies:
            if ns_dep.from_namespace not in namespaces or ns_dep.to_namespace not in namespaces:
                continue
            edge_id = namespace_edge_id(ns_dep.from_namespace, ns_dep.to_namespace)
            if edge_id in edge_ids:
                continue
            edge_ids.add(edge_id)
            edges.append(
                NamespaceEdge(
                    id=edge_id,
                    source=ns_dep.from_namespace,
                    target=ns_dep.to_namespace,
                    dependency_type=ns_dep.dependency_type,
                    description=ns_dep.description,
                    title=f"namespace dependency: {ns_dep.description or ns_dep.dependency_type}",
                )
            )

        if dropped_ids:
            logger.info("dangling_edges_dropped", count=len(dropped_ids))
        return AssembledGraph(nodes=nodes, edges=edges, dropped_edges=len(dropped_ids))
