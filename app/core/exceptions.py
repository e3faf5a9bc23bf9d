"""
Application error taxonomy.

Every error raised by the SQL helpers and the repositories derives from
AppError, which carries a machine-checkable ``kind`` and the HTTP status the
API layer answers with.
"""

from typing import Optional


class AppError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize exception with message and optional details.

        Args:
            message: Human-readable error message (safe to show to clients)
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidInput(AppError):
    """Malformed or empty payload."""

    status_code = 400


class InvalidFilter(AppError):
    """Unrecognized filter key, or a filter value of the wrong type."""

    status_code = 400


class FilterConflict(AppError):
    """Mutually inconsistent bounded filters (min > max)."""

    status_code = 400


class DuplicateEntity(AppError):
    """Creation collides with an existing key."""

    status_code = 400


class NotFound(AppError):
    """Lookup, update or delete target does not exist."""

    status_code = 404


class StoreError(AppError):
    """Underlying storage failure, not otherwise classified."""

    status_code = 500
