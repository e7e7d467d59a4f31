"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from types import TracebackType
from typing import Protocol
from uuid import UUID

from .models import UserAccount


class Transaction(Protocol):
    """
    Scoped unit of work opened by a repository.

    Used as an async context manager. Leaving the block without an explicit
    commit rolls back, whatever the exit path (return, exception, cancellation).
    """

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "Transaction": ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class UserRepository(Protocol):
    """Port interface for account persistence."""

    async def username_exists(self, username: str) -> bool:
        """Return True if an account already uses this username."""
        ...

    async def email_exists(self, email: str) -> bool:
        """Return True if an account already uses this email address."""
        ...

    async def start_transaction(self) -> Transaction:
        """
        Open a transaction that subsequent writes on this repository join.

        Returns:
            Transaction handle owned exclusively by the caller
        """
        ...

    async def create_user(self, account: UserAccount) -> None:
        """
        Insert the account inside the currently open transaction.

        Raises:
            UniqueConstraintViolation: username or email taken at insert time
            PersistenceFailure: any other database failure
        """
        ...


class PasswordHasher(Protocol):
    """Port interface for password credential derivation."""

    def hash_password(self, plaintext: str) -> tuple[bytes, str]:
        """
        Derive storable credentials from a plaintext password.

        Returns:
            Tuple of (salt, encoded hash)
        """
        ...


class TokenIssuer(Protocol):
    """Port interface for email verification tokens."""

    def generate_verification_token(self, account_id: UUID, email: str) -> str:
        """Issue a signed, time-limited token bound to one account."""
        ...


class Notifier(Protocol):
    """Port interface for email delivery."""

    async def send_verification_email(self, email: str, token: str) -> None:
        """
        Send the verification link to the given address.

        Raises:
            NotificationFailure: message could not be handed to the transport
        """
        ...
