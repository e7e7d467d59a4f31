"""Repository adapters - Database implementations."""

from .postgres import PostgresTransaction, PostgresUserRepository, run_migrations

__all__ = ["PostgresTransaction", "PostgresUserRepository", "run_migrations"]
