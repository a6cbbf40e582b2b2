"""
Domain models - Value types flowing through the registration transaction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


class RegistrationState(str, Enum):
    """
    Registration transaction states.

    A registration attempt is a single forward pass:
        RECEIVED -> VALIDATED -> HASHED -> PERSISTED -> TOKEN_ISSUED
        -> SESSION_ESTABLISHED

    Any step may instead end in REJECTED (client error) or FAILED
    (server error). There are no retries and no backward transitions.
    """

    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    HASHED = "HASHED"
    PERSISTED = "PERSISTED"
    TOKEN_ISSUED = "TOKEN_ISSUED"
    SESSION_ESTABLISHED = "SESSION_ESTABLISHED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RegistrationRequest:
    """Decoded sign-up payload. Plaintext fields live only for one attempt."""

    username: str
    password: str = field(repr=False)
    confirm_password: str = field(repr=False)
    email: str
    terms_accepted: bool


@dataclass(frozen=True)
class User:
    """Persisted user account."""

    id: str
    username: str
    password_hash: str = field(repr=False)
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PasswordHistoryEntry:
    """Append-only record of a hash a user has held."""

    user_id: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh tokens bound to one user."""

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    access_ttl: timedelta
    refresh_ttl: timedelta


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a successful registration."""

    user_id: str
    tokens: TokenPair
    state: RegistrationState = RegistrationState.SESSION_ESTABLISHED
