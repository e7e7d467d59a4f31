"""
JWT token issuer - Implements TokenIssuer protocol.

Verification tokens are stateless HS256 JWTs. Validity is decided by the
signature and the ``exp`` claim alone; nothing is stored server-side.
"""

import uuid
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt

from src.config.settings import Settings

ALGORITHM = "HS256"
MIN_SECRET_BYTES = 32  # 256-bit key for HMAC-SHA256


class JwtTokenIssuer:
    """
    Implements TokenIssuer protocol via python-jose.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, secret: str, issuer: str, audience: str, expiry_minutes: int) -> None:
        """
        Initialize issuer with signing configuration.

        Raises:
            ValueError: secret shorter than 256 bits, blank issuer/audience,
                or non-positive expiry
        """
        if not secret or len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
            raise ValueError(f"JWT secret must be at least {MIN_SECRET_BYTES} bytes")
        if not issuer or not issuer.strip():
            raise ValueError("JWT issuer is required")
        if not audience or not audience.strip():
            raise ValueError("JWT audience is required")
        if expiry_minutes <= 0:
            raise ValueError("JWT expiry minutes must be positive")

        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expiry = timedelta(minutes=expiry_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtTokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expiry_minutes=settings.jwt_expiry_minutes,
        )

    def generate_verification_token(self, account_id: UUID, email: str) -> str:
        """
        Issue a verification token for one account.

        Args:
            account_id: Id of the account being verified (``sub`` claim)
            email: Address the token was mailed to

        Returns:
            Compact-serialized signed JWT
        """
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(account_id),
            "email": email,
            "jti": str(uuid.uuid4()),  # unique per call
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "nbf": now,
            "exp": now + self._expiry,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)
