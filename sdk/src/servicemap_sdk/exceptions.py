"""ServiceMap SDK exceptions."""

from __future__ import annotations


class ServiceMapError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(ServiceMapError):
    """Resource not found (404)."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class ResultTooLargeError(ServiceMapError):
    """Full dependency chain exceeded the server's hard cap (413)."""

    def __init__(self, message: str = "Result too large") -> None:
        super().__init__(message, status_code=413)


class ValidationError(ServiceMapError):
    """Request validation failed, e.g. an unknown severity (422)."""

    def __init__(self, message: str = "Validation error") -> None:
        super().__init__(message, status_code=422)


class ServerError(ServiceMapError):
    """Server-side error (5xx), including an unreachable topology store."""

    def __init__(
        self,
        message: str = "Internal server error",
        status_code: int = 500,
    ) -> None:
        super().__init__(message, status_code=status_code)
