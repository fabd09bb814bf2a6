"""Domain error types for the Teşvik Portal.

Purpose:
- Provide typed exceptions raised by domain services and HTTP clients.
- Carry an HTTP-oriented ``status_code`` so the server layer can map any
  ``PortalError`` to a response without knowing the concrete type.

Usage:
- Raise ``NotFoundError`` / ``ValidationFailedError`` from services.
- Catch ``UpstreamServiceError`` around third-party calls and inspect
  ``upstream_status`` or ``details``.
"""

from __future__ import annotations

from typing import Any, Optional


class PortalError(Exception):
    """Base error for portal failures.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code the server responds with.
        details: Optional structured payload for diagnosis.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class NotFoundError(PortalError):
    status_code = 404


class ValidationFailedError(PortalError):
    status_code = 400


class AuthenticationRequiredError(PortalError):
    status_code = 401


class PermissionDeniedError(PortalError):
    status_code = 403


class ConfigurationError(PortalError):
    """Raised when a required credential or setting is missing."""

    status_code = 500


class UpstreamServiceError(PortalError):
    """A third-party service failed or answered with a non-2xx status.

    Args:
        message: Human-readable error description.
        upstream_status: HTTP status returned by the upstream service.
        details: Raw upstream body, when available.
    """

    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.upstream_status = upstream_status


class RateLimitedError(UpstreamServiceError):
    status_code = 429


class ServiceUnavailableError(UpstreamServiceError):
    status_code = 503
