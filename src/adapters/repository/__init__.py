"""Repository adapters - Database implementations."""

from .memory import InMemoryUserRepository
from .postgres import PostgresUserRepository, create_pool, run_migrations

__all__ = ["InMemoryUserRepository", "PostgresUserRepository", "create_pool", "run_migrations"]
