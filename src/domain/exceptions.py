"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries a stable machine-readable ``code`` which the
calling layer translates into client-facing responses.
"""

from enum import Enum


class IdentifierField(str, Enum):
    """User-supplied identifiers that must be globally unique."""

    USERNAME = "username"
    EMAIL = "email"


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    code = "REGISTRATION_ERROR"


class IdentifierConflict(RegistrationError):
    """Username or email is already taken by another account."""

    def __init__(self, field: IdentifierField) -> None:
        self.field = IdentifierField(field)
        self.code = f"{self.field.name}_EXISTS"
        super().__init__(self.code)


class UniqueConstraintViolation(IdentifierConflict):
    """
    Storage rejected the insert because of a unique constraint.

    Raised when a concurrent registration claimed the identifier between
    the existence checks and the insert.
    """

    pass


class PersistenceFailure(RegistrationError):
    """Database unreachable or rejected a write for a non-conflict reason."""

    code = "PERSISTENCE_FAILURE"


class NotificationFailure(RegistrationError):
    """Verification email could not be dispatched."""

    code = "NOTIFICATION_FAILURE"
