"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account registration.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    IdentifierConflict,
    IdentifierField,
    NotificationFailure,
    PersistenceFailure,
    RegistrationError,
    UniqueConstraintViolation,
)
from .models import RegistrationRequest, UserAccount
from .ports import Notifier, PasswordHasher, TokenIssuer, Transaction, UserRepository
from .registration import RegistrationService

__all__ = [
    "IdentifierConflict",
    "IdentifierField",
    "NotificationFailure",
    "Notifier",
    "PasswordHasher",
    "PersistenceFailure",
    "RegistrationError",
    "RegistrationRequest",
    "RegistrationService",
    "TokenIssuer",
    "Transaction",
    "UniqueConstraintViolation",
    "UserAccount",
    "UserRepository",
]
