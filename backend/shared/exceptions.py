"""
Base exception classes for the Orion backend.

Each module should define its own exceptions that inherit from these bases.
The class-level status_code is what the API error handlers use to pick the
HTTP status of the failure envelope.
"""

from typing import Optional, Any


class OrionError(Exception):
    """
    Base exception for all Orion errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details if details is not None else {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(OrionError):
    """Resource not found."""

    status_code = 404


class ValidationError(OrionError):
    """Input validation failed."""

    status_code = 400


class ConflictError(OrionError):
    """Resource already exists (duplicate email, etc.)."""

    status_code = 400


class AuthenticationError(OrionError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(OrionError):
    """Authorization failed (caller does not own the resource)."""

    status_code = 403


class ExternalServiceError(OrionError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
