"""Synchronous ServiceMap API client."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

from servicemap_sdk._response import handle_response
from servicemap_sdk.models import Graph, NamespaceDependency

_DEFAULT_BASE_URL = "http://localhost:8000/api/v1"
_DEFAULT_TIMEOUT = 30.0


def build_graph_params(
    namespaces: Iterable[str] | None = None,
    tags: Iterable[str] | None = None,
    severities: Iterable[str] | None = None,
    search: str | None = None,
    include_dependents: bool = False,
    show_full_chain: bool = False,
) -> dict[str, str]:
    """Encode graph filters as query parameters, omitting empty ones."""
    params: dict[str, str] = {}
    for key, values in (("namespaces", namespaces), ("tags", tags), ("severities", severities)):
        items = [v for v in (values or []) if v]
        if items:
            params[key] = ",".join(items)
    if search and search.strip():
        params["search"] = search.strip()
    if include_dependents:
        params["includeDependents"] = "true"
    if show_full_chain:
        params["showFullChain"] = "true"
    return params


class ServiceMapClient:
    """Synchronous client for the ServiceMap REST API.

    Usage::

        with ServiceMapClient() as client:
            graph = client.graph(namespaces=["payments"], include_dependents=True)
            for node in graph.service_nodes():
                print(node.id, node.highest_severity)
    """

    def __init__(
        self,
        *,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": "servicemap-sdk/0.1.0"},
            timeout=timeout,
        )

    # -- Context manager --------------------------------------------------

    def __enter__(self) -> ServiceMapClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP transport."""
        self._http.close()

    # -- Endpoints --------------------------------------------------------

    def graph(
        self,
        *,
        namespaces: Iterable[str] | None = None,
        tags: Iterable[str] | None = None,
        severities: Iterable[str] | None = None,
        search: str | None = None,
        include_dependents: bool = False,
        show_full_chain: bool = False,
    ) -> Graph:
        """Fetch the filtered dependency graph."""
        params = build_graph_params(
            namespaces, tags, severities, search, include_dependents, show_full_chain
        )
        resp = self._http.get("/graph", params=params)
        handle_response(resp)
        return Graph.model_validate(resp.json())

    def tags(self) -> list[str]:
        resp = self._http.get("/tags")
        handle_response(resp)
        return list(resp.json().get("tags", []))

    def namespace_dependencies(self) -> list[NamespaceDependency]:
        resp = self._http.get("/namespace-dependencies")
        handle_response(resp)
        return [NamespaceDependency.model_validate(d) for d in resp.json()]

    def health(self) -> dict[str, Any]:
        """Check the API health endpoint."""
        # Health lives outside the /api/v1 prefix, so use an absolute URL.
        base = str(self._http.base_url)
        root = base.rsplit("/api/", 1)[0] if "/api/" in base else base
        resp = self._http.get(f"{root.rstrip('/')}/health")
        handle_response(resp)
        return resp.json()
