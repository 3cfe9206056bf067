"""Tests for the synchronous ServiceMapClient."""

from __future__ import annotations

import httpx
import pytest
import respx

from servicemap_sdk import ServiceMapClient
from servicemap_sdk.client import build_graph_params
from servicemap_sdk.exceptions import (
    NotFoundError,
    ResultTooLargeError,
    ServerError,
    ServiceMapError,
    ValidationError,
)

BASE = "http://localhost:8000/api/v1"

GRAPH_PAYLOAD = {
    "nodes": [
        {"id": "payments", "label": "payments", "nodeType": "namespace"},
        {
            "id": "payments::api",
            "label": "api",
            "namespace": "payments",
            "team": "billing",
            "tags": ["tier1"],
            "alertCount": 2,
            "highestSeverity": "critical",
            "nodeType": "service",
        },
    ],
    "edges": [
        {"from": "payments", "to": "payments::api"},
        {
            "id": "payments::api-->payments::db",
            "from": "payments::api",
            "to": "payments::db",
            "edgeType": "service",
            "title": "service dependency",
        },
    ],
    "filters": {"namespaces": ["payments"], "includeDependents": True},
    "expandedNamespaces": ["billing", "payments"],
    "showFullChain": False,
    "largeResultSet": False,
    "droppedEdges": 1,
}


# ---------------------------------------------------------------------------
# Client initialisation
# ---------------------------------------------------------------------------


class TestClientInit:
    def test_client_init_defaults(self) -> None:
        client = ServiceMapClient()
        assert str(client._http.base_url) == f"{BASE}/"
        assert client._http.headers["User-Agent"] == "servicemap-sdk/0.1.0"
        client.close()

    def test_client_context_manager(self) -> None:
        with ServiceMapClient() as client:
            assert not client._http.is_closed
        assert client._http.is_closed


# ---------------------------------------------------------------------------
# Query parameter encoding
# ---------------------------------------------------------------------------


class TestBuildGraphParams:
    def test_empty_filters_produce_no_params(self) -> None:
        assert build_graph_params() == {}

    def test_lists_are_comma_joined(self) -> None:
        params = build_graph_params(
            namespaces=["net", "api"], severities=["critical"], tags=["tier1"]
        )
        assert params == {"namespaces": "net,api", "severities": "critical", "tags": "tier1"}

    def test_flags_only_sent_when_set(self) -> None:
        params = build_graph_params(include_dependents=True)
        assert params == {"includeDependents": "true"}
        assert "showFullChain" not in params

    def test_blank_search_is_omitted(self) -> None:
        assert build_graph_params(search="   ") == {}
        assert build_graph_params(search=" pay ") == {"search": "pay"}


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


class TestGraph:
    @respx.mock
    def test_graph_parses_response(self) -> None:
        route = respx.get(f"{BASE}/graph").mock(
            return_value=httpx.Response(200, json=GRAPH_PAYLOAD)
        )
        with ServiceMapClient() as client:
            graph = client.graph(namespaces=["payments"], include_dependents=True)

        request = route.calls.last.request
        assert request.url.params["namespaces"] == "payments"
        assert request.url.params["includeDependents"] == "true"

        assert graph.expanded_namespaces == ["billing", "payments"]
        assert graph.dropped_edges == 1
        services = graph.service_nodes()
        assert len(services) == 1
        assert services[0].highest_severity == "critical"
        assert services[0].alert_count == 2
        assert services[0].team == "billing"

    @respx.mock
    def test_graph_edges_keep_direction(self) -> None:
        respx.get(f"{BASE}/graph").mock(return_value=httpx.Response(200, json=GRAPH_PAYLOAD))
        with ServiceMapClient() as client:
            graph = client.graph()
        service_edges = [e for e in graph.edges if e.edge_type == "service"]
        assert service_edges[0].source == "payments::api"
        assert service_edges[0].target == "payments::db"
        containment = [e for e in graph.edges if e.id is None]
        assert containment[0].source == "payments"


class TestTagsAndNamespaceDependencies:
    @respx.mock
    def test_tags(self) -> None:
        respx.get(f"{BASE}/tags").mock(
            return_value=httpx.Response(200, json={"tags": ["pci", "tier1"]})
        )
        with ServiceMapClient() as client:
            assert client.tags() == ["pci", "tier1"]

    @respx.mock
    def test_namespace_dependencies(self) -> None:
        respx.get(f"{BASE}/namespace-dependencies").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {
                        "id": 1,
                        "from_namespace": "api",
                        "to_namespace": "db",
                        "dependency_type": "manual",
                        "description": "reads",
                    }
                ],
            )
        )
        with ServiceMapClient() as client:
            deps = client.namespace_dependencies()
        assert deps[0].from_namespace == "api"
        assert deps[0].description == "reads"


class TestHealthCheck:
    @respx.mock
    def test_health_check(self) -> None:
        respx.get("http://localhost:8000/health").mock(
            return_value=httpx.Response(200, json={"status": "healthy", "database": "connected"})
        )
        with ServiceMapClient() as client:
            result = client.health()
        assert result["status"] == "healthy"


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class TestErrorHandling:
    @respx.mock
    def test_validation_error_raises(self) -> None:
        respx.get(f"{BASE}/graph").mock(
            return_value=httpx.Response(422, json={"detail": "Invalid severity: severe"})
        )
        with ServiceMapClient() as client, pytest.raises(ValidationError) as exc_info:
            client.graph(severities=["severe"])
        assert "severe" in exc_info.value.message
        assert exc_info.value.status_code == 422

    @respx.mock
    def test_result_too_large_raises(self) -> None:
        respx.get(f"{BASE}/graph").mock(
            return_value=httpx.Response(413, json={"detail": "Full chain too large"})
        )
        with ServiceMapClient() as client, pytest.raises(ResultTooLargeError):
            client.graph(show_full_chain=True)

    @respx.mock
    def test_store_unavailable_raises_server_error(self) -> None:
        respx.get(f"{BASE}/tags").mock(
            return_value=httpx.Response(503, json={"detail": "Topology store unavailable"})
        )
        with ServiceMapClient() as client, pytest.raises(ServerError) as exc_info:
            client.tags()
        assert exc_info.value.status_code == 503

    @respx.mock
    def test_not_found_raises(self) -> None:
        respx.get(f"{BASE}/tags").mock(return_value=httpx.Response(404, text="missing"))
        with ServiceMapClient() as client, pytest.raises(NotFoundError) as exc_info:
            client.tags()
        assert exc_info.value.message == "missing"

    @respx.mock
    def test_other_client_error_raises_base(self) -> None:
        respx.get(f"{BASE}/tags").mock(return_value=httpx.Response(400, json={}))
        with ServiceMapClient() as client, pytest.raises(ServiceMapError) as exc_info:
            client.tags()
        assert exc_info.value.status_code == 400
