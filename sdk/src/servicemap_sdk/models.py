"""Pydantic response models for the ServiceMap API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphNode(BaseModel):
    """Namespace, service or placeholder node.

    Service-only fields (``team``, ``tags``, enrichment maps, ...) are kept
    as extra attributes.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    label: str
    node_type: str = Field(alias="nodeType")
    alert_count: int | None = Field(default=None, alias="alertCount")
    highest_severity: str | None = Field(default=None, alias="highestSeverity")

    @property
    def is_service(self) -> bool:
        return self.node_type == "service"


class GraphEdge(BaseModel):
    """Graph edge; containment edges have neither ``id`` nor ``edge_type``."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | None = None
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    edge_type: str | None = Field(default=None, alias="edgeType")


class Graph(BaseModel):
    """Response of ``GET /graph``. Nodes and edges are unordered."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    filters: dict[str, Any] = Field(default_factory=dict)
    expanded_namespaces: list[str] | None = Field(default=None, alias="expandedNamespaces")
    show_full_chain: bool = Field(default=False, alias="showFullChain")
    large_result_set: bool = Field(default=False, alias="largeResultSet")
    full_chain_services: int | None = Field(default=None, alias="fullChainServices")
    dropped_edges: int = Field(default=0, alias="droppedEdges")

    def service_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.is_service]


class NamespaceDependency(BaseModel):
    id: int | None = None
    from_namespace: str
    to_namespace: str
    dependency_type: str = "manual"
    description: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
