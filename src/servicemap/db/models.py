"""SQLAlchemy 2.x ORM models for the topology store."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ServiceRecord(Base):
    """A service keyed by its natural key (namespace, name)."""

    __tablename__ = "services"

    service_namespace: Mapped[str] = mapped_column(String(255), primary_key=True)
    service_name: Mapped[str] = mapped_column(String(255), primary_key=True)
    environment: Mapped[str | None] = mapped_column(String(100), nullable=True)
    team: Mapped[str | None] = mapped_column(String(100), nullable=True)
    component_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    tags: Mapped[list[str]] = mapped_column(ARRAY(Text), default=list)
    # {"tag_name": "otel" | "alertmanager" | "user"}
    tag_sources: Mapped[dict] = mapped_column(JSONB, default=dict)
    external_calls: Mapped[dict] = mapped_column(JSONB, default=list)
    database_calls: Mapped[dict] = mapped_column(JSONB, default=list)
    rpc_calls: Mapped[dict] = mapped_column(JSONB, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_seen: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("ix_services_tags", "tags", postgresql_using="gin"),)


class ServiceDependencyRecord(Base):
    """Directed dependency between two services, by natural key."""

    __tablename__ = "service_dependencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_service_namespace: Mapped[str] = mapped_column(String(255))
    from_service_name: Mapped[str] = mapped_column(String(255))
    to_service_namespace: Mapped[str] = mapped_column(String(255))
    to_service_name: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    last_seen: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_service_deps_from", "from_service_namespace", "from_service_name"),
        Index("ix_service_deps_to", "to_service_namespace", "to_service_name"),
    )


class NamespaceDependencyRecord(Base):
    """Directed namespace-level dependency, maintained by hand."""

    __tablename__ = "namespace_dependencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_namespace: Mapped[str] = mapped_column(String(255), index=True)
    to_namespace: Mapped[str] = mapped_column(String(255), index=True)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dependency_type: Mapped[str] = mapped_column(String(50), default="manual")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class AlertIncidentRecord(Base):
    """One alert incident for a service. Only firing rows feed the graph."""

    __tablename__ = "alert_incidents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_namespace: Mapped[str] = mapped_column(String(255))
    service_name: Mapped[str] = mapped_column(String(255))
    instance_id: Mapped[str] = mapped_column(String(255), default="")
    severity: Mapped[str] = mapped_column(String(20))
    message: Mapped[str] = mapped_column(Text)
    alert_fingerprint: Mapped[str] = mapped_column(String(64))
    incident_start: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    incident_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="firing")
    alert_source: Mapped[str] = mapped_column(String(100), default="manual")
    external_alert_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    acknowledged_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    acknowledged_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_alert_incidents_service_status", "service_namespace", "service_name", "status"),
        Index("ix_alert_incidents_fingerprint", "alert_fingerprint"),
    )
