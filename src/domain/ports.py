"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .models import TokenPair


class UserRepository(Protocol):
    """Port interface for user persistence."""

    def register(self, username: str, password_hash: str, email: str) -> str:
        """
        Create a user and its first password history entry atomically.

        Both rows are written in one transaction. Uniqueness of username
        and email is decided by the store's own constraints at insert
        time, never by a prior lookup.

        Args:
            username: Validated username
            password_hash: bcrypt hash of the user's password
            email: Normalized email address

        Returns:
            The new user's identifier

        Raises:
            DuplicateIdentity: username or email already registered
            StoreUnavailable: store unreachable or timed out
            StoreOperationFailed: any other store failure
        """
        ...

    def remove(self, user_id: str) -> None:
        """
        Delete a user and its password history atomically.

        Used only to compensate for a registration whose session could
        not be established.

        Raises:
            StoreUnavailable: store unreachable or timed out
            StoreOperationFailed: any other store failure
        """
        ...


class TokenIssuer(Protocol):
    """Port interface for session token issuance."""

    def issue(self, user_id: str) -> TokenPair:
        """
        Issue a short-lived access token and a long-lived refresh token.

        Args:
            user_id: Identifier the tokens are bound to

        Returns:
            TokenPair with both tokens and their lifetimes

        Raises:
            TokenIssuanceFailed: signing key missing or signing failed
        """
        ...
