"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Atomicity and Uniqueness:
-------------------------
1. **One transaction per registration**: the users row and its first
   password_history row are written inside ``conn.transaction()``. The
   block commits only if both inserts succeed; any exception rolls both
   back, so no orphaned user without history can become visible.

2. **Store-enforced uniqueness**: there is no SELECT-before-INSERT. The
   unique constraints on ``email`` and ``LOWER(username)`` are the only
   arbiter, so two concurrent registrations for the same identity cannot
   both commit. The losing INSERT raises ``UniqueViolation``, which is
   translated to ``DuplicateIdentity``.

3. **Bounded waits**: acquiring a pooled connection is bounded by the
   pool timeout and every statement by the server-side
   ``statement_timeout`` configured on the pool's connections. Both
   surface as ``StoreUnavailable``.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool, PoolTimeout

from src.domain.exceptions import DuplicateIdentity, StoreOperationFailed, StoreUnavailable

logger = logging.getLogger(__name__)

# Constraint names created by migrations/001_create_users.sql
_EMAIL_CONSTRAINT = "users_email_key"
_USERNAME_CONSTRAINT = "users_username_lower_key"


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, timeout: float | None = None) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            timeout: Seconds to wait for a pooled connection (pool default if None)
        """
        self._pool = pool
        self._timeout = timeout

    def register(self, username: str, password_hash: str, email: str) -> str:
        """
        Insert a user and its first password history entry atomically.

        Args:
            username: Validated username
            password_hash: bcrypt hash from the domain layer
            email: Normalized email address

        Returns:
            The new user's id (UUID string)

        Raises:
            DuplicateIdentity: username or email already exists
            StoreUnavailable: no connection, connection lost or timed out
            StoreOperationFailed: any other database error
        """
        user_sql = """
            INSERT INTO users (id, username, password, email, created_at, updated_at)
            VALUES (%s, %s, %s, %s, NOW(), NOW())
        """
        history_sql = """
            INSERT INTO password_history (user_id, password)
            VALUES (%s, %s)
        """

        user_id = uuid.uuid4()

        with self._transaction("register user") as conn:
            conn.execute(user_sql, (user_id, username, password_hash, email))
            conn.execute(history_sql, (user_id, password_hash))

        logger.info("Inserted user %s", user_id)
        return str(user_id)

    def remove(self, user_id: str) -> None:
        """
        Delete a user and all of its password history atomically.

        Raises:
            StoreUnavailable: no connection, connection lost or timed out
            StoreOperationFailed: any other database error
        """
        key = uuid.UUID(user_id)
        with self._transaction("remove user") as conn:
            conn.execute("DELETE FROM password_history WHERE user_id = %s", (key,))
            conn.execute("DELETE FROM users WHERE id = %s", (key,))

        logger.info("Removed user %s", user_id)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[psycopg.Connection]:
        """
        Yield a connection inside a transaction and translate store errors.

        Commits when the block exits normally; any exception rolls back.
        """
        try:
            with self._pool.connection(timeout=self._timeout) as conn, conn.transaction():
                yield conn
        except PoolTimeout as exc:
            logger.error("%s: no database connection available: %s", operation, exc)
            raise StoreUnavailable("database connection unavailable") from exc
        except errors.UniqueViolation as exc:
            field = _conflicting_field(exc)
            logger.info("%s: duplicate %s", operation, field)
            raise DuplicateIdentity(field) from exc
        except errors.QueryCanceled as exc:
            logger.error("%s: statement timed out: %s", operation, exc)
            raise StoreUnavailable("database statement timed out") from exc
        except psycopg.OperationalError as exc:
            logger.error("%s: database unreachable: %s", operation, exc)
            raise StoreUnavailable("database unreachable") from exc
        except psycopg.Error as exc:
            logger.error("%s: database error: %s", operation, exc)
            raise StoreOperationFailed(f"{operation} failed") from exc


def _conflicting_field(exc: errors.UniqueViolation) -> str:
    """Name the identity field behind a unique violation."""
    constraint = exc.diag.constraint_name or ""
    if constraint == _EMAIL_CONSTRAINT:
        return "email"
    if constraint == _USERNAME_CONSTRAINT:
        return "username"
    return "identity"


def create_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    statement_timeout_ms: int,
    timeout: float,
) -> ConnectionPool:
    """
    Create a connection pool whose connections carry a statement timeout.

    Args:
        database_url: libpq connection string
        min_size: Minimum connections kept open
        max_size: Maximum connections
        statement_timeout_ms: Server-side limit for each statement
        timeout: Default seconds to wait for a pooled connection
    """
    return ConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        kwargs={"options": f"-c statement_timeout={statement_timeout_ms}"},
        open=True,
    )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
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

            with pool.connection() as conn:
                conn.execute(sql_content)
                # Committed when the pooled connection block exits

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
