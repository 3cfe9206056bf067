"""Integration test fixtures: the demo topology served through the real app.

The fake store is loaded from the same constants the demo seed script
writes to Postgres, so these tests describe what the dashboard shows
after ``scripts/seed_demo_data.py``.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from scripts.seed_demo_data import ALERTS, NAMESPACE_EDGES, NAMESPACES, SERVICE_EDGES
from servicemap.api.app import app, wire_store
from tests.integration.fakes import FakeTopologyStore


@pytest.fixture
def seeded_store():
    store = FakeTopologyStore()
    for namespace, names in NAMESPACES.items():
        for name in names:
            store.add_service(namespace, name, tags=[namespace, "demo"])
    for from_ns, from_name, to_ns, to_name in SERVICE_EDGES:
        store.add_dependency(from_ns, from_name, to_ns, to_name)
    for from_ns, to_ns, dep_type, description in NAMESPACE_EDGES:
        store.add_namespace_dependency(from_ns, to_ns, description, dependency_type=dep_type)
    for namespace, name, severity, _message in ALERTS:
        store.add_alert(namespace, name, severity)
    return store


@pytest.fixture
async def api(seeded_store):
    """HTTPX client against the app wired to the seeded store."""
    wire_store(app, seeded_store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    wire_store(app, None)
