"""Core data models for ServiceMap."""

from servicemap.models.base import (
    SEVERITY_RANK,
    AlertCount,
    AlertStatus,
    DanglingEdgePolicy,
    EdgeType,
    NamespaceDependency,
    NodeType,
    Service,
    ServiceDependency,
    Severity,
    service_key,
    split_service_key,
)

__all__ = [
    "SEVERITY_RANK",
    "AlertCount",
    "AlertStatus",
    "DanglingEdgePolicy",
    "EdgeType",
    "NamespaceDependency",
    "NodeType",
    "Service",
    "ServiceDependency",
    "Severity",
    "service_key",
    "split_service_key",
]
