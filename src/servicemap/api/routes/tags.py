"""Service tag listing for filter dropdowns."""

from fastapi import APIRouter

from servicemap.api.exceptions import StoreUnavailableError
from servicemap.topology.store import TopologyStore

router = APIRouter()

_store: TopologyStore | None = None


def set_store(store: TopologyStore | None) -> None:
    global _store
    _store = store


@router.get("/tags")
async def list_tags() -> dict[str, list[str]]:
    """Distinct tags across all services, sorted."""
    if _store is None:
        raise StoreUnavailableError("Topology store not configured")
    return {"tags": await _store.list_tags()}
