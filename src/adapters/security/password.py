"""
PBKDF2 password hasher - Implements PasswordHasher protocol.

Credentials are stored as a raw 16-byte salt plus the base64 text of a
32-byte PBKDF2-HMAC-SHA256 key derived with 100,000 iterations.
"""

import base64
import hashlib
import secrets

SALT_SIZE = 16  # bytes
KEY_SIZE = 32  # bytes (256-bit)
ITERATIONS = 100_000


class Pbkdf2PasswordHasher:
    """
    Implements PasswordHasher protocol via hashlib.pbkdf2_hmac.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stateless; a single instance can be shared across requests.
    """

    def hash_password(self, plaintext: str) -> tuple[bytes, str]:
        """
        Hash a password with a fresh random salt.

        Args:
            plaintext: User's password (never logged or stored)

        Returns:
            Tuple of (16-byte salt, base64-encoded derived key)
        """
        salt = secrets.token_bytes(SALT_SIZE)
        return salt, self.derive(plaintext, salt)

    def derive(self, plaintext: str, salt: bytes) -> str:
        """Deterministic half of hash_password: same inputs, same output."""
        if len(salt) != SALT_SIZE:
            raise ValueError(f"salt must be {SALT_SIZE} bytes, got {len(salt)}")
        key = hashlib.pbkdf2_hmac(
            "sha256", plaintext.encode("utf-8"), salt, ITERATIONS, dklen=KEY_SIZE
        )
        return base64.b64encode(key).decode("ascii")
