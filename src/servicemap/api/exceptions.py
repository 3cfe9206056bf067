"""Structured exception hierarchy following RFC 7807 Problem Details.

All ServiceMap domain exceptions extend ``ServiceMapError`` and are
converted to RFC 7807 JSON responses by the FastAPI exception handler
registered in ``app.py``. The response carries the request id bound by
``RequestIDMiddleware`` so failures can be matched to log lines.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class ServiceMapError(Exception):
    """Base exception for all ServiceMap domain errors."""

    status_code: int = 500
    error_type: str = "about:blank"
    title: str = "Internal Server Error"

    def __init__(
        self,
        detail: str = "",
        *,
        instance: str = "",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.detail = detail or self.title
        self.instance = instance
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_problem_detail(self) -> dict[str, Any]:
        """RFC 7807 Problem Details JSON object."""
        body: dict[str, Any] = {
            "type": self.error_type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if self.instance:
            body["instance"] = self.instance
        if self.extra:
            body.update(self.extra)
        return body


class ValidationError(ServiceMapError):
    status_code = 422
    error_type = "urn:servicemap:error:validation"
    title = "Validation Error"


class ResultTooLargeError(ServiceMapError):
    status_code = 413
    error_type = "urn:servicemap:error:result-too-large"
    title = "Result Too Large"


class StoreUnavailableError(ServiceMapError):
    status_code = 503
    error_type = "urn:servicemap:error:store-unavailable"
    title = "Topology Store Unavailable"


class GraphTimeoutError(ServiceMapError):
    status_code = 504
    error_type = "urn:servicemap:error:graph-timeout"
    title = "Graph Build Timed Out"


@contextmanager
def error_context(
    error_cls: type[ServiceMapError] = ServiceMapError,
    detail: str = "",
    **kwargs: Any,
) -> Iterator[None]:
    """Context manager that wraps unexpected exceptions into structured errors.

    Usage::

        with error_context(StoreUnavailableError, detail="services query failed"):
            rows = await session.execute(stmt)
    """
    try:
        yield
    except ServiceMapError:
        raise
    except Exception as exc:
        msg = detail or str(exc)
        raise error_cls(msg, **kwargs) from exc


def servicemap_exception_handler(request: Request, exc: ServiceMapError) -> JSONResponse:
    """FastAPI exception handler for ServiceMapError subclasses."""
    request_id = getattr(request.state, "request_id", "")
    logger.warning(
        "servicemap_error",
        error_type=exc.error_type,
        status=exc.status_code,
        detail=exc.detail,
        cause=repr(exc.__cause__) if exc.__cause__ else None,
    )
    body = exc.to_problem_detail()
    if request_id:
        body.setdefault("request_id", request_id)
    return JSONResponse(
        status_code=exc.status_code,
        content=body,
        media_type="application/problem+json",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all ServiceMap exception handlers on the FastAPI app."""
    app.add_exception_handler(ServiceMapError, servicemap_exception_handler)  # type: ignore[arg-type]
