"""Read-only interface to the topology store.

The graph pipeline only ever reads through this interface, so it can run
against the SQL repository in production and an in-memory store in tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection

from pydantic import BaseModel

from servicemap.models.base import AlertCount, NamespaceDependency, Service, ServiceDependency

ServiceKeyPair = tuple[str, str]


class ServiceScope(BaseModel):
    """Which services a graph build is looking at.

    ``namespaces`` of ``None`` means unrestricted; an empty set matches
    nothing (a full-chain closure that reached no service).
    """

    model_config = {"frozen": True}

    namespaces: frozenset[str] | None = None
    tags: frozenset[str] = frozenset()
    search: str | None = None


class TopologyStore(ABC):
    """Abstract read surface over services, dependencies and alerts."""

    @abstractmethod
    async def list_namespace_dependencies(self) -> list[NamespaceDependency]:
        """All namespace dependency edges, ordered by (from, to)."""

    @abstractmethod
    async def list_services(self, scope: ServiceScope) -> list[Service]:
        """Services matching the scope, ordered by (namespace, name)."""

    @abstractmethod
    async def list_dependencies_touching(
        self, keys: Collection[ServiceKeyPair]
    ) -> list[ServiceDependency]:
        """Service edges where either endpoint is one of ``keys``."""

    @abstractmethod
    async def list_service_dependencies(self) -> list[ServiceDependency]:
        """Every service dependency edge."""

    @abstractmethod
    async def count_firing_alerts(
        self,
        keys: Collection[ServiceKeyPair],
        severities: Collection[str] | None = None,
    ) -> list[AlertCount]:
        """Firing alert counts grouped by (namespace, name, severity)."""

    @abstractmethod
    async def list_tags(self) -> list[str]:
        """Distinct service tags, sorted."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise if the store cannot be reached."""
