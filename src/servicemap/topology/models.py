"""Graph view models returned to visualization clients.

Nodes and edges are built fresh for every request and never persisted.
Field aliases give the camelCase wire names the dashboard expects.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from servicemap.models.base import EdgeType, NodeType, Severity
from servicemap.topology.filters import GraphFilters


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ── Nodes ────────────────────────────────────────────────────────────


class NamespaceNode(_WireModel):
    id: str
    label: str
    node_type: NodeType = Field(default=NodeType.NAMESPACE, alias="nodeType")


class ServiceNode(_WireModel):
    id: str
    label: str
    namespace: str
    team: str | None = None
    environment: str | None = None
    component_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    tag_sources: dict[str, str] = Field(default_factory=dict, alias="tagSources")
    external_calls: Any = Field(default_factory=list)
    database_calls: Any = Field(default_factory=list)
    rpc_calls: Any = Field(default_factory=list)
    alert_count: int = Field(default=0, alias="alertCount")
    highest_severity: str = Field(default=Severity.NONE.value, alias="highestSeverity")
    node_type: NodeType = Field(default=NodeType.SERVICE, alias="nodeType")


class PlaceholderNode(_WireModel):
    """Stand-in for a dependency endpoint that was not itself emitted."""

    id: str
    label: str
    namespace: str
    node_type: NodeType = Field(default=NodeType.PLACEHOLDER, alias="nodeType")


GraphNode = NamespaceNode | ServiceNode | PlaceholderNode


# ── Edges ────────────────────────────────────────────────────────────


class ContainmentEdge(_WireModel):
    """Namespace → service membership edge; carries no id or type."""

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class ServiceEdge(_WireModel):
    id: str
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    edge_type: EdgeType = Field(default=EdgeType.SERVICE, alias="edgeType")
    title: str = "service dependency"


class NamespaceEdge(_WireModel):
    id: str
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    dependency_type: str = "manual"
    description: str | None = None
    title: str = ""
    edge_type: EdgeType = Field(default=EdgeType.NAMESPACE, alias="edgeType")


GraphEdge = ContainmentEdge | ServiceEdge | NamespaceEdge


def service_edge_id(source: str, target: str) -> str:
    return f"{source}-->{target}"


def namespace_edge_id(source: str, target: str) -> str:
    return f"{source}==>{target}"


# ── Response ─────────────────────────────────────────────────────────


class GraphView(BaseModel):
    """A complete graph build result."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    filters: GraphFilters = Field(default_factory=GraphFilters)
    expanded_namespaces: list[str] | None = None
    show_full_chain: bool = False
    large_result_set: bool = False
    full_chain_services: int | None = None
    dropped_edges: int = 0

    def service_nodes(self) -> list[ServiceNode]:
        return [n for n in self.nodes if isinstance(n, ServiceNode)]

    def namespace_nodes(self) -> list[NamespaceNode]:
        return [n for n in self.nodes if isinstance(n, NamespaceNode)]

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "nodes": [n.to_wire() for n in self.nodes],
            "edges": [e.to_wire() for e in self.edges],
            "filters": self.filters.to_response(),
            "showFullChain": self.show_full_chain,
            "largeResultSet": self.large_result_set,
            "droppedEdges": self.dropped_edges,
        }
        if self.expanded_namespaces is not None:
            body["expandedNamespaces"] = self.expanded_namespaces
        if self.full_chain_services is not None:
            body["fullChainServices"] = self.full_chain_services
        return body
