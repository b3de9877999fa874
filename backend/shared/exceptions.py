"""
Base exception classes for the Secrets backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application: the API layer
maps every base class to an HTTP status through ``status_code``.
"""

from typing import Optional, Any


class SecretsAPIError(Exception):
    """
    Base exception for all Secrets API errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "success": False,
            "error": self.code,
            "message": self.message,
        }


class ValidationError(SecretsAPIError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(SecretsAPIError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(SecretsAPIError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(SecretsAPIError):
    """Resource not found."""

    status_code = 404


class ConflictError(SecretsAPIError):
    """Resource already exists."""

    status_code = 409


class InternalError(SecretsAPIError):
    """Unexpected server-side failure. The message is hidden in production."""

    status_code = 500


class StorageError(InternalError):
    """The backing database rejected or failed a query."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        pg_code: Optional[str] = None,
    ):
        super().__init__(message, code or "STORAGE_ERROR", details)
        self.pg_code = pg_code

    @property
    def is_unique_violation(self) -> bool:
        """True when Postgres reported a unique constraint violation."""
        return self.pg_code == "23505"


class ExternalServiceError(SecretsAPIError):
    """Error communicating with an external service."""

    status_code = 502

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
