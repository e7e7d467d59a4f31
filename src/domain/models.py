"""
Domain models - Registration input and the persisted account.
"""

from dataclasses import dataclass, field, replace
from uuid import UUID, uuid4


@dataclass(frozen=True)
class RegistrationRequest:
    """Pre-validated registration input. Never persisted."""

    username: str
    email: str
    plaintext_password: str = field(repr=False)


@dataclass(frozen=True)
class UserAccount:
    """
    Account row as written by a successful registration.

    The id is generated at construction and never changes; attaching a
    verification token produces a copy carrying the same id.
    """

    username: str
    email: str
    password_hash: str = field(repr=False)
    password_salt: bytes = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    email_verification_token: str | None = field(default=None, repr=False)

    def with_verification_token(self, token: str) -> "UserAccount":
        return replace(self, email_verification_token=token)
