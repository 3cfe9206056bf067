"""Database persistence layer: SQLAlchemy 2.x async ORM.

``TopologyRepository`` lives in :mod:`servicemap.db.repository`; it is not
re-exported here because it depends on the topology query builders, which
in turn import the ORM models from this package.
"""

from servicemap.db.models import (
    AlertIncidentRecord,
    Base,
    NamespaceDependencyRecord,
    ServiceDependencyRecord,
    ServiceRecord,
)
from servicemap.db.session import dispose_engine, get_session_factory, init_engine

__all__ = [
    "AlertIncidentRecord",
    "Base",
    "NamespaceDependencyRecord",
    "ServiceDependencyRecord",
    "ServiceRecord",
    "dispose_engine",
    "get_session_factory",
    "init_engine",
]
