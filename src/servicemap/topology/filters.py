"""Canonical graph filter set and its normalization from raw query values."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from servicemap.api.exceptions import ValidationError
from servicemap.models.base import Severity

_VALID_SEVERITIES = frozenset(s.value for s in Severity)


class GraphFilters(BaseModel):
    """Normalized filters for one graph build."""

    model_config = {"frozen": True}

    namespaces: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    severities: frozenset[str] = frozenset()
    search: str | None = None
    include_dependents: bool = False
    show_full_chain: bool = False

    @property
    def has_severity_filter(self) -> bool:
        return bool(self.severities)

    def to_response(self) -> dict[str, Any]:
        """Echo form used in the graph response (sorted, camelCase)."""
        return {
            "namespaces": sorted(self.namespaces),
            "tags": sorted(self.tags),
            "severities": sorted(self.severities),
            "search": self.search,
            "includeDependents": self.include_dependents,
            "showFullChain": self.show_full_chain,
        }


def split_list(raw: str | None) -> frozenset[str]:
    """Split a comma-separated value into a set of trimmed, non-empty items."""
    if not raw:
        return frozenset()
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


def parse_bool(raw: str | bool | None) -> bool:
    if isinstance(raw, bool):
        return raw
    return raw is not None and raw.strip().lower() == "true"


def normalize_filters(
    namespaces: str | None = None,
    tags: str | None = None,
    severities: str | None = None,
    search: str | None = None,
    include_dependents: str | bool | None = None,
    show_full_chain: str | bool | None = None,
) -> GraphFilters:
    """Parse raw query values into a :class:`GraphFilters`.

    Severity values are lowercased and checked against the known severities.
    An unknown severity raises :class:`ValidationError` rather than silently
    producing a filter that can never match.
    """
    severity_set = frozenset(s.lower() for s in split_list(severities))
    invalid = sorted(severity_set - _VALID_SEVERITIES)
    if invalid:
        raise ValidationError(
            f"Unknown severity value(s): {', '.join(invalid)}",
            extra={
                "invalid_severities": invalid,
                "allowed_severities": [s.value for s in Severity],
            },
        )

    trimmed = search.strip() if search else ""

    return GraphFilters(
        namespaces=split_list(namespaces),
        tags=split_list(tags),
        severities=severity_set,
        search=trimmed or None,
        include_dependents=parse_bool(include_dependents),
        show_full_chain=parse_bool(show_full_chain),
    )
