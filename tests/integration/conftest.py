"""
Shared fixtures for integration tests.

Requires PostgreSQL reachable at DATABASE_URL (e.g. via docker-compose).
Tests in this package are skipped when the database cannot be reached.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import psycopg
import pytest
from psycopg_pool import AsyncConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.config.settings import get_settings

# Module-level marker for all integration tests
pytestmark = pytest.mark.integration


@pytest.fixture
async def pool() -> AsyncGenerator[AsyncConnectionPool, None]:
    """Create connection pool for integration tests, with a clean users table."""
    settings = get_settings()
    try:
        probe = await psycopg.AsyncConnection.connect(settings.database_url, connect_timeout=2)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")
    await probe.close()

    pool = AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    await pool.open()
    await run_migrations(pool)
    async with pool.connection() as conn:
        await conn.execute("DELETE FROM users")
    yield pool
    await pool.close()


@pytest.fixture
def repository(pool: AsyncConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


@pytest.fixture
def count_users(pool: AsyncConnectionPool) -> Callable[[], Awaitable[int]]:
    """Return a coroutine function counting committed rows in users."""

    async def _count() -> int:
        async with pool.connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM users")
            row = await cursor.fetchone()
        return row[0]

    return _count
