from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a PIN or admin credentials are invalid."""

    status_code = 401


class NotFoundError(DomainError):
    """Raised when an employee, log or shift id is unknown."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when an action does not fit the current state."""

    status_code = 409


class StoreError(DomainError):
    """Raised when a record store call fails (connection, SQL, constraint)."""

    status_code = 503

    def __init__(self, message: str, *, table: str | None = None, operation: str | None = None):
        super().__init__(message)
        self.table = table
        self.operation = operation
