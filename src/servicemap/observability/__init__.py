"""Logging setup for ServiceMap."""

from servicemap.observability.logging import configure_logging

__all__ = ["configure_logging"]
