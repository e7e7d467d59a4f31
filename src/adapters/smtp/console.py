"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging the composed verification email instead of
handing it to a mail transport.
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify your email address"


@dataclass(frozen=True)
class VerificationEmail:
    """Composed verification message, transport-independent."""

    recipient: str
    subject: str
    url: str
    body: str


def build_verification_url(frontend_url: str, token: str) -> str:
    """Return ``{frontend_url}/verify?token={token}``."""
    return f"{frontend_url.rstrip('/')}/verify?token={quote(token, safe='')}"


def compose_verification_email(frontend_url: str, email: str, token: str) -> VerificationEmail:
    url = build_verification_url(frontend_url, token)
    body = (
        "Welcome!\n\n"
        "Confirm your email address by opening the link below:\n\n"
        f"{url}\n\n"
        "If you did not create an account, you can ignore this message."
    )
    return VerificationEmail(recipient=email, subject=VERIFICATION_SUBJECT, url=url, body=body)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints verification links to stdout.
    """

    def __init__(self, frontend_url: str) -> None:
        """
        Args:
            frontend_url: Base URL of the frontend that serves /verify
        """
        if not frontend_url or not frontend_url.strip():
            raise ValueError("frontend_url is required")
        self._frontend_url = frontend_url

    async def send_verification_email(self, email: str, token: str) -> None:
        """
        Log the verification email (simulates delivery).

        In production, this would be replaced with an SMTP adapter that
        raises NotificationFailure when the transport rejects the message.

        Args:
            email: Recipient email address
            token: Signed verification token
        """
        message = compose_verification_email(self._frontend_url, email, token)
        logger.info("[VERIFICATION] Email: %s Url: %s", message.recipient, message.url)
