"""Repository layer: bridges SQLAlchemy ORM rows and topology domain models."""

from collections.abc import Collection

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from servicemap.api.exceptions import StoreUnavailableError, error_context
from servicemap.db.models import NamespaceDependencyRecord, ServiceDependencyRecord, ServiceRecord
from servicemap.models.base import AlertCount, NamespaceDependency, Service, ServiceDependency
from servicemap.topology.query import (
    ServiceQuery,
    all_dependencies_statement,
    dependencies_touching_statement,
    distinct_tags_statement,
    firing_alert_counts_statement,
    namespace_dependencies_statement,
)
from servicemap.topology.store import ServiceKeyPair, ServiceScope, TopologyStore

logger = structlog.get_logger()


class TopologyRepository(TopologyStore):
    """SQL-backed :class:`TopologyStore`.

    Every query failure surfaces as :class:`StoreUnavailableError`; retries
    are left to the connection pool (``pool_pre_ping``).
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sf = session_factory

    # ── Namespaces ──────────────────────────────────────────────────

    async def list_namespace_dependencies(self) -> list[NamespaceDependency]:
        with error_context(StoreUnavailableError, detail="namespace dependency query failed"):
            async with self._sf() as session:
                result = await session.execute(namespace_dependencies_statement())
                return [self._namespace_dep_to_model(r) for r in result.scalars().all()]

    # ── Services ────────────────────────────────────────────────────

    async def list_services(self, scope: ServiceScope) -> list[Service]:
        stmt = ServiceQuery.from_scope(scope).statement()
        with error_context(StoreUnavailableError, detail="service query failed"):
            async with self._sf() as session:
                result = await session.execute(stmt)
                services = [self._service_to_model(r) for r in result.scalars().all()]
        logger.debug("services_queried", count=len(services))
        return services

    async def list_tags(self) -> list[str]:
        with error_context(StoreUnavailableError, detail="tag query failed"):
            async with self._sf() as session:
                result = await session.execute(distinct_tags_statement())
                return [tag for tag in result.scalars().all() if tag]

    # ── Service dependencies ────────────────────────────────────────

    async def list_dependencies_touching(
        self, keys: Collection[ServiceKeyPair]
    ) -> list[ServiceDependency]:
        if not keys:
            return []
        with error_context(StoreUnavailableError, detail="service dependency query failed"):
            async with self._sf() as session:
                result = await session.execute(dependencies_touching_statement(keys))
                return [self._service_dep_to_model(r) for r in result.scalars().all()]

    async def list_service_dependencies(self) -> list[ServiceDependency]:
        with error_context(StoreUnavailableError, detail="service dependency query failed"):
            async with self._sf() as session:
                result = await session.execute(all_dependencies_statement())
                return [self._service_dep_to_model(r) for r in result.scalars().all()]

    # ── Alerts ──────────────────────────────────────────────────────

    async def count_firing_alerts(
        self,
        keys: Collection[ServiceKeyPair],
        severities: Collection[str] | None = None,
    ) -> list[AlertCount]:
        if not keys:
            return []
        stmt = firing_alert_counts_statement(keys, severities)
        with error_context(StoreUnavailableError, detail="alert query failed"):
            async with self._sf() as session:
                result = await session.execute(stmt)
                return [
                    AlertCount(namespace=ns, name=name, severity=severity, count=int(count))
                    for ns, name, severity, count in result.all()
                ]

    # ── Health ──────────────────────────────────────────────────────

    async def ping(self) -> None:
        with error_context(StoreUnavailableError, detail="database unreachable"):
            async with self._sf() as session:
                await session.execute(text("SELECT 1"))

    # ── Row conversion ──────────────────────────────────────────────

    @staticmethod
    def _service_to_model(record: ServiceRecord) -> Service:
        return Service(
            namespace=record.service_namespace,
            name=record.service_name,
            environment=record.environment,
            team=record.team,
            component_type=record.component_type,
            tags=list(record.tags or []),
            tag_sources=dict(record.tag_sources or {}),
            external_calls=record.external_calls if record.external_calls is not None else [],
            database_calls=record.database_calls if record.database_calls is not None else [],
            rpc_calls=record.rpc_calls if record.rpc_calls is not None else [],
            last_seen=record.last_seen,
        )

    @staticmethod
    def _service_dep_to_model(record: ServiceDependencyRecord) -> ServiceDependency:
        return ServiceDependency(
            from_namespace=record.from_service_namespace,
            from_name=record.from_service_name,
            to_namespace=record.to_service_namespace,
            to_name=record.to_service_name,
            last_seen=record.last_seen,
        )

    @staticmethod
    def _namespace_dep_to_model(record: NamespaceDependencyRecord) -> NamespaceDependency:
        return NamespaceDependency(
            id=record.id,
            from_namespace=record.from_namespace,
            to_namespace=record.to_namespace,
            dependency_type=record.dependency_type or "manual",
            description=record.description,
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
