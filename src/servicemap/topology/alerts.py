"""Alert correlation: per-service alert counts and worst firing severity."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from servicemap.models.base import SEVERITY_RANK, AlertCount, Service, Severity

# Anything outside the known severities sorts after "none".
_UNRANKED = len(SEVERITY_RANK) + 1


def severity_rank(severity: str) -> int:
    return SEVERITY_RANK.get(severity, _UNRANKED)


def more_severe(current: str | None, candidate: str) -> str:
    """Return whichever of the two severities ranks as more severe."""
    if current is None or severity_rank(candidate) < severity_rank(current):
        return candidate
    return current


class ServiceAlertSummary(BaseModel):
    alert_count: int = 0
    highest_severity: str = Severity.NONE.value


class AlertCorrelation(BaseModel):
    """Aggregated firing alerts for one graph build."""

    summaries: dict[str, ServiceAlertSummary] = Field(default_factory=dict)
    severity_filtered: bool = False

    def summary_for(self, key: str) -> ServiceAlertSummary:
        return self.summaries.get(key) or ServiceAlertSummary()

    def keeps(self, key: str) -> bool:
        """Whether a service survives the severity filter.

        With a severity filter active, a service without any matching
        firing alert is dropped from the graph entirely.
        """
        return not self.severity_filtered or key in self.summaries


def correlate_alerts(
    counts: Iterable[AlertCount],
    severity_filtered: bool = False,
) -> AlertCorrelation:
    """Fold grouped alert counts into one summary per service."""
    summaries: dict[str, ServiceAlertSummary] = {}
    for row in counts:
        if row.count <= 0:
            continue
        summary = summaries.get(row.key)
        if summary is None:
            summaries[row.key] = ServiceAlertSummary(
                alert_count=row.count, highest_severity=row.severity
            )
            continue
        summary.alert_count += row.count
        summary.highest_severity = more_severe(summary.highest_severity, row.severity)
    return AlertCorrelation(summaries=summaries, severity_filtered=severity_filtered)


def surviving_services(services: Iterable[Service], correlation: AlertCorrelation) -> list[Service]:
    """Services that stay in the graph once the severity filter is applied."""
    return [s for s in services if correlation.keeps(s.key)]
