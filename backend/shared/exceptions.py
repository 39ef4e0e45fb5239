"""
Base exception classes for the Barida identity backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps the categories below onto HTTP responses in one place.
"""

from typing import Optional, Any


class BaridaError(Exception):
    """
    Base exception for all Barida errors.

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

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(BaridaError):
    """Resource not found."""

    pass


class ValidationError(BaridaError):
    """Input validation failed."""

    pass


class ConflictError(BaridaError):
    """Request conflicts with the current state of a resource."""

    pass


class AuthenticationError(BaridaError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(BaridaError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(BaridaError):
    """The server is missing configuration required for the operation."""

    pass
