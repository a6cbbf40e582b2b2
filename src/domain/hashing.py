"""
Credential hasher - bcrypt with a configurable work factor.

bcrypt only reads the first 72 bytes of its input, so longer secrets are
rejected before the primitive runs instead of being silently truncated.
The produced hash embeds algorithm, cost and salt ($2b$<cost>$<salt+hash>),
so verification needs nothing besides the stored string.
"""

import logging

import bcrypt

from .exceptions import CredentialTooLong, HashingFailed

logger = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


class CredentialHasher:
    """One-way salted password hashing."""

    def __init__(self, rounds: int = 10) -> None:
        """
        Args:
            rounds: bcrypt cost factor (log2 of iterations, 4..31)
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """
        Hash a password.

        Raises:
            CredentialTooLong: UTF-8 encoding is longer than 72 bytes
            HashingFailed: bcrypt could not produce a hash
        """
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            raise CredentialTooLong(f"password exceeds {MAX_PASSWORD_BYTES} bytes")

        try:
            return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode()
        except (ValueError, OSError) as exc:
            logger.error("bcrypt hashing failed: %s", exc)
            raise HashingFailed("password hashing failed") from exc

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Check a password against a stored hash.

        bcrypt.checkpw compares in constant time. Inputs bcrypt cannot
        accept (over-long secrets, malformed hashes) never match.
        """
        secret = plaintext.encode("utf-8")
        if len(secret) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(secret, hashed.encode())
        except ValueError:
            return False
