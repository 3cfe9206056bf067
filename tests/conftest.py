"""Root conftest: shared topology fixtures and route wiring."""

import pytest

from servicemap.api.routes import graph as graph_routes
from servicemap.api.routes import namespace_deps as namespace_routes
from servicemap.api.routes import tags as tag_routes
from tests.integration.fakes import FakeTopologyStore


@pytest.fixture
def store():
    """An empty in-memory topology store."""
    return FakeTopologyStore()


@pytest.fixture
def demo_store():
    """Three namespaces: net depends on api, api depends on db.

    net::gw -> api::svc -> db::pg, plus an isolated ops::cron.
    api::svc has a warning and a critical alert firing, db::pg a fatal one
    and a resolved critical one.
    """
    s = FakeTopologyStore()
    s.add_service("net", "gw", team="edge", tags=["ingress"])
    s.add_service("api", "svc", team="core", tags=["tier1", "http"], environment="prod")
    s.add_service("db", "pg", team="data", tags=["tier1", "storage"])
    s.add_service("ops", "cron", tags=["batch"])
    s.add_dependency("net", "gw", "api", "svc")
    s.add_dependency("api", "svc", "db", "pg")
    s.add_namespace_dependency("net", "api", description="public traffic")
    s.add_namespace_dependency("api", "db")
    s.add_alert("api", "svc", "warning")
    s.add_alert("api", "svc", "critical")
    s.add_alert("db", "pg", "fatal")
    s.add_alert("db", "pg", "critical", status="resolved")
    return s


@pytest.fixture(autouse=True)
def reset_route_wiring():
    """Route modules hold module-level references; clear them between tests."""
    yield
    graph_routes.set_builder(None)
    tag_routes.set_store(None)
    namespace_routes.set_store(None)
