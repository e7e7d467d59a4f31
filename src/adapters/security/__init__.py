"""Security adapters - Credential hashing and token signing."""

from .password import Pbkdf2PasswordHasher
from .token import JwtTokenIssuer

__all__ = ["JwtTokenIssuer", "Pbkdf2PasswordHasher"]
