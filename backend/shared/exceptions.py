"""
Base exception classes for the Garden accounts backend.

Each module should define its own exceptions that inherit from these bases.
The API maps each base class to one HTTP status, so module exceptions only
need to pick the right parent.
"""

from typing import Optional, Any


class GardenError(Exception):
    """
    Base exception for all Garden errors.

    All custom exceptions should inherit from this class.
    """

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


class NotFoundError(GardenError):
    """Resource not found."""

    pass


class ValidationError(GardenError):
    """Input validation failed."""

    pass


class ConflictError(GardenError):
    """Resource already exists or conflicts with current state."""

    pass


class AuthenticationError(GardenError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(GardenError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(GardenError):
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
