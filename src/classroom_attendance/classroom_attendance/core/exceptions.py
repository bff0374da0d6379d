from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400

    def __init__(self, message: str, *, errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class DuplicateEnrollmentError(ValidationError):
    """Raised when a student joins a class they are already enrolled in."""

    def __init__(self, message: str = "Already enrolled in this class"):
        super().__init__(message)


class AuthenticationError(DomainError):
    """Raised when there is no session or credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a class, lecture or user does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a unique value could not be allocated."""

    status_code = 409
