"""
Shared fixtures for integration tests.

Every test here runs against the PostgreSQL database at DATABASE_URL and
starts from empty users/password_history tables.
"""

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _clean(clean_database: None) -> None:
    """Clean tables before each test."""


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)
