"""Statement construction for topology queries.

Filters compose as SQLAlchemy expressions; bound parameters are owned by
SQLAlchemy, so adding or removing a filter never shifts placeholder
positions.
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import ColumnElement, Select, and_, false, func, or_, select, tuple_

from servicemap.db.models import (
    AlertIncidentRecord,
    NamespaceDependencyRecord,
    ServiceDependencyRecord,
    ServiceRecord,
)
from servicemap.models.base import AlertStatus
from servicemap.topology.store import ServiceKeyPair, ServiceScope


class ServiceQuery:
    """Builder for the service-matching predicate.

    Usage::

        stmt = ServiceQuery().with_any_tag({"db"}).in_namespaces({"net"}).statement()
    """

    def __init__(self) -> None:
        self._predicates: list[ColumnElement[bool]] = []

    @classmethod
    def from_scope(cls, scope: ServiceScope) -> ServiceQuery:
        query = cls().with_any_tag(scope.tags).matching(scope.search)
        if scope.namespaces is not None:
            query = query.in_namespaces(scope.namespaces)
        return query

    def with_any_tag(self, tags: Collection[str]) -> ServiceQuery:
        """Match services carrying at least one of ``tags``."""
        if tags:
            self._predicates.append(ServiceRecord.tags.overlap(sorted(tags)))
        return self

    def in_namespaces(self, namespaces: Collection[str]) -> ServiceQuery:
        """Restrict to ``namespaces``. An empty collection matches nothing."""
        if not namespaces:
            self._predicates.append(false())
        else:
            self._predicates.append(ServiceRecord.service_namespace.in_(sorted(namespaces)))
        return self

    def matching(self, search: str | None) -> ServiceQuery:
        """Case-insensitive substring match on namespace or name."""
        if search:
            self._predicates.append(
                or_(
                    ServiceRecord.service_namespace.icontains(search, autoescape=True),
                    ServiceRecord.service_name.icontains(search, autoescape=True),
                )
            )
        return self

    @property
    def predicates(self) -> list[ColumnElement[bool]]:
        return list(self._predicates)

    def statement(self) -> Select[tuple[ServiceRecord]]:
        stmt = select(ServiceRecord)
        if self._predicates:
            stmt = stmt.where(and_(*self._predicates))
        return stmt.order_by(ServiceRecord.service_namespace, ServiceRecord.service_name)


def dependencies_touching_statement(
    keys: Collection[ServiceKeyPair],
) -> Select[tuple[ServiceDependencyRecord]]:
    """Edges where either endpoint is in ``keys``; the other end may lie outside."""
    key_list = sorted(keys)
    return select(ServiceDependencyRecord).where(
        or_(
            tuple_(
                ServiceDependencyRecord.from_service_namespace,
                ServiceDependencyRecord.from_service_name,
            ).in_(key_list),
            tuple_(
                ServiceDependencyRecord.to_service_namespace,
                ServiceDependencyRecord.to_service_name,
            ).in_(key_list),
        )
    )


def all_dependencies_statement() -> Select[tuple[ServiceDependencyRecord]]:
    return select(ServiceDependencyRecord)


def namespace_dependencies_statement() -> Select[tuple[NamespaceDependencyRecord]]:
    return select(NamespaceDependencyRecord).order_by(
        NamespaceDependencyRecord.from_namespace, NamespaceDependencyRecord.to_namespace
    )


def firing_alert_counts_statement(
    keys: Collection[ServiceKeyPair],
    severities: Collection[str] | None = None,
) -> Select[tuple[str, str, str, int]]:
    """Firing alerts for ``keys`` grouped by (namespace, name, severity)."""
    stmt = select(
        AlertIncidentRecord.service_namespace,
        AlertIncidentRecord.service_name,
        AlertIncidentRecord.severity,
        func.count().label("alert_count"),
    ).where(
        AlertIncidentRecord.status == AlertStatus.FIRING.value,
        tuple_(AlertIncidentRecord.service_namespace, AlertIncidentRecord.service_name).in_(
            sorted(keys)
        ),
    )
    if severities:
        stmt = stmt.where(AlertIncidentRecord.severity.in_(sorted(severities)))
    return stmt.group_by(
        AlertIncidentRecord.service_namespace,
        AlertIncidentRecord.service_name,
        AlertIncidentRecord.severity,
    )


def distinct_tags_statement() -> Select[tuple[str]]:
    tag = func.unnest(ServiceRecord.tags).label("tag")
    inner = select(tag).subquery()
    return select(inner.c.tag).distinct().order_by(inner.c.tag)
