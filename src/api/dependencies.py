"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Long-lived collaborators are built once in the app lifespan and
stored in app.state; the repository is created per request because
it owns that request's transaction.
"""

from fastapi import Request
from psycopg_pool import AsyncConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.adapters.security.password import Pbkdf2PasswordHasher
from src.adapters.security.token import JwtTokenIssuer
from src.adapters.smtp.console import ConsoleNotifier
from src.domain.registration import RegistrationService

# Module-level singleton - Pbkdf2PasswordHasher is stateless
_password_hasher = Pbkdf2PasswordHasher()


def get_pool(request: Request) -> AsyncConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresUserRepository(pool)


def get_password_hasher() -> Pbkdf2PasswordHasher:
    """Get PBKDF2 password hasher (singleton)."""
    return _password_hasher


def get_token_issuer(request: Request) -> JwtTokenIssuer:
    """Get token issuer built from settings at startup."""
    return request.app.state.token_issuer


def get_notifier(request: Request) -> ConsoleNotifier:
    """Get notifier built from settings at startup."""
    return request.app.state.notifier


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, hasher, token issuer and notifier
    for the domain service.
    """
    return RegistrationService(
        repository=get_repository(request),
        password_hasher=get_password_hasher(),
        token_issuer=get_token_issuer(request),
        notifier=get_notifier(request),
    )
