"""Errors raised by the user and task services.

Services raise these synchronously and never retry; the API layer translates
them into HTTP responses.
"""

from typing import Any


class UserServiceError(Exception):
    """Base class for account errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserServiceError):
    """A supplied field is missing or malformed."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(UserServiceError):
    """The email address is already registered."""


class AuthenticationError(UserServiceError):
    """Login failed. The message never says which credential was wrong."""

    def __init__(self, message: str = "Unable to login"):
        super().__init__(message)


class PersistenceError(UserServiceError):
    """The database was unavailable or a write failed."""
