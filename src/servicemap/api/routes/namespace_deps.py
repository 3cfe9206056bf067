"""Read-only namespace dependency listing."""

from typing import Any

from fastapi import APIRouter

from servicemap.api.exceptions import StoreUnavailableError
from servicemap.topology.store import TopologyStore

router = APIRouter()

_store: TopologyStore | None = None


def set_store(store: TopologyStore | None) -> None:
    global _store
    _store = store


@router.get("/namespace-dependencies")
async def list_namespace_dependencies() -> list[dict[str, Any]]:
    """All namespace dependencies ordered by (from, to)."""
    if _store is None:
        raise StoreUnavailableError("Topology store not configured")
    deps = await _store.list_namespace_dependencies()
    return [d.model_dump(mode="json") for d in deps]
