"""ServiceMap Python SDK."""

from __future__ import annotations

from servicemap_sdk.client import ServiceMapClient
from servicemap_sdk.exceptions import (
    NotFoundError,
    ResultTooLargeError,
    ServerError,
    ServiceMapError,
    ValidationError,
)

__all__ = [
    "NotFoundError",
    "ResultTooLargeError",
    "ServerError",
    "ServiceMapClient",
    "ServiceMapError",
    "ValidationError",
]
__version__ = "0.1.0"
