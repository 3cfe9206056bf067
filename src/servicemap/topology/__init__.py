"""Service dependency topology for ServiceMap.

Turns dashboard filters into a deduplicated namespace/service graph
annotated with firing alert severity.
"""

from servicemap.topology.filters import GraphFilters, normalize_filters
from servicemap.topology.graph import ServiceGraphBuilder
from servicemap.topology.models import GraphView
from servicemap.topology.store import ServiceScope, TopologyStore

__all__ = [
    "GraphFilters",
    "GraphView",
    "ServiceGraphBuilder",
    "ServiceScope",
    "TopologyStore",
    "normalize_filters",
]
