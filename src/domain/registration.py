"""
Registration domain service - account creation workflow.

This module contains the core business logic for user registration:
uniqueness checks, credential derivation, verification token issuance,
and the transactional insert + notify step.

Ordering (fixed):
    username check -> email check -> hashing -> token -> transaction

Nothing is written before both existence checks pass. Once the transaction
is open, any failure triggers exactly one rollback and the original
exception propagates unchanged.

Notification inside the transaction
===================================

The verification email is dispatched before commit so that a failed send
discards the account. The reverse case cannot be undone: if the email goes
out and the commit then fails, the user holds a token for an account that
does not exist. Delivery is therefore at-least-once, never exactly-once.
"""

import asyncio
import logging
from dataclasses import dataclass

from .exceptions import IdentifierConflict, IdentifierField
from .models import RegistrationRequest, UserAccount
from .ports import Notifier, PasswordHasher, TokenIssuer, Transaction, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow over its injected ports. Holds no
    per-request state; one ``register`` call is one attempt.
    """

    repository: UserRepository
    password_hasher: PasswordHasher
    token_issuer: TokenIssuer
    notifier: Notifier

    async def register(self, request: RegistrationRequest) -> UserAccount:
        """
        Register a new account and send its verification email.

        Args:
            request: Pre-validated registration input

        Returns:
            The persisted account, verification token attached

        Raises:
            IdentifierConflict: username or email already taken
            PersistenceFailure: insert or commit failed
            NotificationFailure: verification email could not be sent
        """
        if await self.repository.username_exists(request.username):
            logger.warning("Registration rejected: username taken")
            raise IdentifierConflict(IdentifierField.USERNAME)

        if await self.repository.email_exists(request.email):
            logger.warning("Registration rejected: email taken")
            raise IdentifierConflict(IdentifierField.EMAIL)

        # PBKDF2 is CPU-bound; keep it off the event loop
        salt, password_hash = await asyncio.to_thread(
            self.password_hasher.hash_password, request.plaintext_password
        )

        account = UserAccount(
            username=request.username,
            email=request.email,
            password_hash=password_hash,
            password_salt=salt,
        )
        token = self.token_issuer.generate_verification_token(account.id, account.email)
        account = account.with_verification_token(token)

        async with await self.repository.start_transaction() as transaction:
            try:
                await self.repository.create_user(account)
                await self.notifier.send_verification_email(account.email, token)
            except Exception:
                await self._rollback(transaction)
                raise
            await transaction.commit()

        logger.info("Registered account %s", account.id)
        return account

    async def _rollback(self, transaction: Transaction) -> None:
        """
        Roll back after a failed step.

        A failing rollback is logged rather than raised so the caller sees
        the failure that caused it.
        """
        try:
            await transaction.rollback()
        except Exception:
            logger.exception("Rollback failed after registration error")
