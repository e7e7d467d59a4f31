"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 (async) with raw SQL.

Transaction Design:
-------------------
``start_transaction()`` checks a connection out of the pool and binds it to
the repository; ``create_user`` and the existence queries run on that
connection until the transaction is released. Release (commit or rollback)
returns the connection to the pool. A repository instance therefore serves
one unit of work at a time and must not be shared between concurrent tasks.

Uniqueness:
-----------
The existence checks are advisory. The ``uq_users_username`` and
``uq_users_email`` constraints are what actually guarantee uniqueness; a
violation at insert time is mapped to ``UniqueConstraintViolation`` so that
a lost check-then-act race reports the same conflict as a pre-check would.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from types import TracebackType

import psycopg
from psycopg import errors
from psycopg_pool import AsyncConnectionPool

from src.domain.exceptions import (
    IdentifierField,
    PersistenceFailure,
    UniqueConstraintViolation,
)
from src.domain.models import UserAccount

logger = logging.getLogger(__name__)

# Constraint names from migrations/001_create_users.sql
_CONSTRAINT_FIELDS = {
    "uq_users_username": IdentifierField.USERNAME,
    "uq_users_email": IdentifierField.EMAIL,
}


class PostgresTransaction:
    """
    Scoped transaction over one pooled connection.

    Implements the Transaction protocol. The first of commit/rollback
    releases the connection; later calls are no-ops. Exiting the context
    without a commit rolls back.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        conn: psycopg.AsyncConnection,
        repository: "PostgresUserRepository",
    ) -> None:
        self._pool = pool
        self._conn = conn
        self._repository = repository
        self._released = False

    @property
    def connection(self) -> psycopg.AsyncConnection:
        return self._conn

    @property
    def released(self) -> bool:
        return self._released

    async def commit(self) -> None:
        if self._released:
            return
        try:
            await self._conn.commit()
        except psycopg.Error as e:
            raise PersistenceFailure("commit failed") from e
        await self._release()

    async def rollback(self) -> None:
        if self._released:
            return
        try:
            await self._conn.rollback()
        except psycopg.Error as e:
            raise PersistenceFailure("rollback failed") from e
        finally:
            await self._release()

    async def __aenter__(self) -> "PostgresTransaction":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._released:
            return
        if exc_type is not None:
            logger.info("Transaction exited with %s, rolling back", exc_type.__name__)
        try:
            await self.rollback()
        except PersistenceFailure:
            if exc_type is None:
                raise
            # The in-flight exception takes precedence
            logger.exception("Rollback on exit failed")

    async def _release(self) -> None:
        self._released = True
        self._repository._unbind(self)
        await self._pool.putconn(self._conn)


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool
        self._transaction: PostgresTransaction | None = None

    async def username_exists(self, username: str) -> bool:
        """Check whether any account already uses this username."""
        sql = "SELECT EXISTS (SELECT 1 FROM users WHERE username = %s)"
        return await self._fetch_flag(sql, (username,))

    async def email_exists(self, email: str) -> bool:
        """Check whether any account already uses this email address."""
        sql = "SELECT EXISTS (SELECT 1 FROM users WHERE email = %s)"
        return await self._fetch_flag(sql, (email,))

    async def start_transaction(self) -> PostgresTransaction:
        """
        Check out a connection and open a transaction on it.

        psycopg starts the transaction implicitly with the first statement,
        so no BEGIN is issued here.

        Raises:
            RuntimeError: a transaction is already open on this repository
            PersistenceFailure: no connection could be obtained
        """
        if self._transaction is not None:
            raise RuntimeError("transaction already open on this repository")
        try:
            conn = await self._pool.getconn()
        except (psycopg.Error, TimeoutError) as e:
            raise PersistenceFailure("could not obtain a database connection") from e
        self._transaction = PostgresTransaction(self._pool, conn, self)
        return self._transaction

    async def create_user(self, account: UserAccount) -> None:
        """
        Insert the account on the open transaction.

        Args:
            account: Account with id, credentials and verification token set

        Raises:
            RuntimeError: no transaction is open
            UniqueConstraintViolation: username or email taken at insert time
            PersistenceFailure: any other database error
        """
        if self._transaction is None:
            raise RuntimeError("create_user requires an open transaction")

        sql = """
            INSERT INTO users (id, username, email, password_hash, password_salt, email_verification_token)
            VALUES (%s, %s, %s, %s, %s, %s)
        """
        params = (
            account.id,
            account.username,
            account.email,
            account.password_hash,
            account.password_salt,
            account.email_verification_token,
        )

        try:
            await self._transaction.connection.execute(sql, params)
        except errors.UniqueViolation as e:
            field = _CONSTRAINT_FIELDS.get(e.diag.constraint_name or "")
            if field is None:
                raise PersistenceFailure("unexpected unique violation") from e
            raise UniqueConstraintViolation(field) from e
        except psycopg.Error as e:
            raise PersistenceFailure("insert failed") from e

    async def _fetch_flag(self, sql: str, params: tuple) -> bool:
        try:
            async with self._connection() as conn:
                cursor = await conn.execute(sql, params)
                row = await cursor.fetchone()
        except psycopg.Error as e:
            raise PersistenceFailure("existence query failed") from e
        return bool(row[0])

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[psycopg.AsyncConnection]:
        """Yield the transaction's connection if one is open, else a pooled one."""
        if self._transaction is not None:
            yield self._transaction.connection
        else:
            async with self._pool.connection() as conn:
                yield conn

    def _unbind(self, transaction: PostgresTransaction) -> None:
        if self._transaction is transaction:
            self._transaction = None


async def run_migrations(pool: AsyncConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 AsyncConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            async with pool.connection() as conn:
                await conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
