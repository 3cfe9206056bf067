"""Shared HTTP response handling."""

from __future__ import annotations

import httpx

from servicemap_sdk.exceptions import (
    NotFoundError,
    ResultTooLargeError,
    ServerError,
    ServiceMapError,
    ValidationError,
)


def handle_response(response: httpx.Response) -> None:
    """Raise the appropriate SDK exception for non-2xx responses."""
    if response.is_success:
        return

    status = response.status_code

    # Problem Details bodies carry the message in "detail"
    detail = ""
    try:
        body = response.json()
        detail = body.get("detail", "") if isinstance(body, dict) else ""
    except ValueError:
        detail = response.text[:200] if response.text else ""

    if status == 404:
        raise NotFoundError(detail or "Resource not found")

    if status == 413:
        raise ResultTooLargeError(detail or "Result too large")

    if status == 422:
        raise ValidationError(detail or "Validation error")

    if status >= 500:
        raise ServerError(
            detail or "Internal server error",
            status_code=status,
        )

    # Catch-all for other 4xx
    raise ServiceMapError(detail or f"Request failed with status {status}", status_code=status)
