"""
In-memory repository adapter - Implements UserRepository protocol.

Process-local store for development and tests. A single lock makes each
register/remove call atomic and enforces the same uniqueness rules as
the PostgreSQL schema: email exact (already normalized), username
case-insensitive.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone

from src.domain.exceptions import DuplicateIdentity
from src.domain.models import PasswordHistoryEntry, User

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._usernames: dict[str, str] = {}
        self._emails: dict[str, str] = {}
        self._history: list[PasswordHistoryEntry] = []

    def register(self, username: str, password_hash: str, email: str) -> str:
        """Insert a user and its first password history entry atomically."""
        username_key = username.lower()

        with self._lock:
            if username_key in self._usernames:
                raise DuplicateIdentity("username")
            if email in self._emails:
                raise DuplicateIdentity("email")

            now = datetime.now(timezone.utc)
            user = User(
                id=str(uuid.uuid4()),
                username=username,
                password_hash=password_hash,
                email=email,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            self._usernames[username_key] = user.id
            self._emails[email] = user.id
            self._history.append(PasswordHistoryEntry(user_id=user.id, password_hash=password_hash))

        logger.info("Inserted user %s", user.id)
        return user.id

    def remove(self, user_id: str) -> None:
        """Delete a user and all of its password history atomically."""
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is not None:
                del self._usernames[user.username.lower()]
                del self._emails[user.email]
            self._history = [entry for entry in self._history if entry.user_id != user_id]

        logger.info("Removed user %s", user_id)

    def get(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def password_history(self, user_id: str | None = None) -> list[PasswordHistoryEntry]:
        with self._lock:
            if user_id is None:
                return list(self._history)
            return [entry for entry in self._history if entry.user_id == user_id]
