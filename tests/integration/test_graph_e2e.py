"""End-to-end graph requests over the demo topology."""

import pytest


def _services(body) -> set[str]:
    return {n["id"] for n in body["nodes"] if n["nodeType"] == "service"}


def _namespaces(body) -> set[str]:
    return {n["id"] for n in body["nodes"] if n["nodeType"] == "namespace"}


def _edges(body, edge_type) -> set[str]:
    return {e["id"] for e in body["edges"] if e.get("edgeType") == edge_type}


class TestDashboardFlows:
    @pytest.mark.asyncio
    async def test_blast_radius_of_payments(self, api):
        response = await api.get(
            "/api/v1/graph", params={"namespaces": "payments", "includeDependents": "true"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["expandedNamespaces"] == ["payments", "platform", "storefront"]
        assert "analytics" not in _namespaces(body)
        assert _edges(body, "namespace") == {
            "payments==>platform",
            "storefront==>payments",
            "storefront==>platform",
        }
        gateway = next(n for n in body["nodes"] if n["id"] == "payments::gateway")
        assert gateway["alertCount"] == 2
        assert gateway["highestSeverity"] == "critical"

    @pytest.mark.asyncio
    async def test_only_burning_services(self, api):
        response = await api.get("/api/v1/graph", params={"severities": "critical,fatal"})
        body = response.json()
        assert _services(body) == {"payments::gateway", "platform::postgres"}
        assert _namespaces(body) == {"payments", "platform"}
        assert _edges(body, "service") == set()
        assert _edges(body, "namespace") == {"payments==>platform"}
        assert body["droppedEdges"] == 3

    @pytest.mark.asyncio
    async def test_full_chain_from_payments(self, api):
        response = await api.get(
            "/api/v1/graph", params={"namespaces": "payments", "showFullChain": "true"}
        )
        body = response.json()
        assert body["fullChainServices"] == 8
        assert "analytics" not in _namespaces(body)
        assert "storefront::web" in _services(body)
        assert body["largeResultSet"] is False

    @pytest.mark.asyncio
    async def test_full_chain_isolated_namespace(self, api):
        response = await api.get(
            "/api/v1/graph", params={"namespaces": "analytics", "showFullChain": "true"}
        )
        body = response.json()
        assert _services(body) == {"analytics::collector"}
        assert body["edges"] == [{"from": "analytics", "to": "analytics::collector"}]

    @pytest.mark.asyncio
    async def test_tag_and_search_filters(self, api):
        response = await api.get("/api/v1/graph", params={"tags": "platform", "search": "RED"})
        assert _services(response.json()) == {"platform::redis"}

    @pytest.mark.asyncio
    async def test_tags_listing(self, api):
        response = await api.get("/api/v1/tags")
        assert response.json()["tags"] == [
            "analytics",
            "demo",
            "payments",
            "platform",
            "storefront",
        ]
