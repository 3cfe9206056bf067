"""Base data models shared across all ServiceMap components."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

SERVICE_KEY_SEPARATOR = "::"


class Severity(StrEnum):
    """Alert severity, most severe first."""

    FATAL = "fatal"
    CRITICAL = "critical"
    WARNING = "warning"
    NONE = "none"


# Lower rank is more severe.
SEVERITY_RANK: dict[str, int] = {
    Severity.FATAL: 1,
    Severity.CRITICAL: 2,
    Severity.WARNING: 3,
    Severity.NONE: 4,
}


class AlertStatus(StrEnum):
    """Lifecycle status of an alert incident."""

    FIRING = "firing"
    RESOLVED = "resolved"


class NodeType(StrEnum):
    """Kind of node emitted in a dependency graph."""

    NAMESPACE = "namespace"
    SERVICE = "service"
    PLACEHOLDER = "placeholder"


class EdgeType(StrEnum):
    """Kind of dependency edge. Containment edges carry no type."""

    SERVICE = "service"
    NAMESPACE = "namespace"


class DanglingEdgePolicy(StrEnum):
    """What to do with a service edge whose endpoint was not emitted."""

    DROP = "drop"
    PLACEHOLDER = "placeholder"


def service_key(namespace: str, name: str) -> str:
    """Natural key of a service as used for graph node ids."""
    return f"{namespace}{SERVICE_KEY_SEPARATOR}{name}"


def split_service_key(key: str) -> tuple[str, str]:
    namespace, _, name = key.partition(SERVICE_KEY_SEPARATOR)
    return namespace, name


class Service(BaseModel):
    """A discovered service, identified by (namespace, name)."""

    namespace: str
    name: str
    environment: str | None = None
    team: str | None = None
    component_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    tag_sources: dict[str, str] = Field(default_factory=dict)
    external_calls: Any = Field(default_factory=list)
    database_calls: Any = Field(default_factory=list)
    rpc_calls: Any = Field(default_factory=list)
    last_seen: datetime | None = None

    @property
    def key(self) -> str:
        return service_key(self.namespace, self.name)


class ServiceDependency(BaseModel):
    """Directed service-to-service dependency."""

    from_namespace: str
    from_name: str
    to_namespace: str
    to_name: str
    last_seen: datetime | None = None

    @property
    def from_key(self) -> str:
        return service_key(self.from_namespace, self.from_name)

    @property
    def to_key(self) -> str:
        return service_key(self.to_namespace, self.to_name)


class NamespaceDependency(BaseModel):
    """Directed namespace-to-namespace dependency (static reference data)."""

    id: int | None = None
    from_namespace: str
    to_namespace: str
    dependency_type: str = "manual"
    description: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AlertCount(BaseModel):
    """Number of firing alerts for one service at one severity."""

    namespace: str
    name: str
    severity: str
    count: int

    @property
    def key(self) -> str:
        return service_key(self.namespace, self.name)
