"""Dependency graph endpoint."""

from typing import Any

import structlog
from fastapi import APIRouter, Query

from servicemap.api.exceptions import StoreUnavailableError
from servicemap.topology.filters import normalize_filters
from servicemap.topology.graph import ServiceGraphBuilder

logger = structlog.get_logger()
router = APIRouter()

_builder: ServiceGraphBuilder | None = None


def set_builder(builder: ServiceGraphBuilder | None) -> None:
    global _builder
    _builder = builder


def _get_builder() -> ServiceGraphBuilder:
    if _builder is None:
        raise StoreUnavailableError("Topology store not configured")
    return _builder


@router.get("/graph")
async def get_graph(
    namespaces: str | None = Query(None, description="Comma-separated namespaces"),
    tags: str | None = Query(None, description="Comma-separated tags (any match)"),
    severities: str | None = Query(None, description="Comma-separated severities"),
    search: str | None = Query(None, description="Substring of namespace or name"),
    include_dependents: str | None = Query(None, alias="includeDependents"),
    show_full_chain: str | None = Query(None, alias="showFullChain"),
) -> dict[str, Any]:
    """Build the filtered service dependency graph."""
    filters = normalize_filters(
        namespaces=namespaces,
        tags=tags,
        severities=severities,
        search=search,
        include_dependents=include_dependents,
        show_full_chain=show_full_chain,
    )
    logger.debug("graph_requested", filters=filters.to_response())
    view = await _get_builder().build(filters)
    return view.to_response()
