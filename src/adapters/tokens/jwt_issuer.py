"""
JWT token issuer - Implements TokenIssuer protocol with PyJWT.

Issues a short-lived access token and a long-lived refresh token, both
HS256-signed and bound to the user id through the ``sub`` claim. Each
token carries its own ``jti`` and a ``type`` claim so one can never be
accepted in place of the other.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from src.domain.exceptions import TokenIssuanceFailed
from src.domain.models import TokenPair

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


class InvalidToken(Exception):
    """Token failed signature, expiry, issuer or type checks."""

    pass


class JWTTokenIssuer:
    """
    Implements TokenIssuer protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        secret_key: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
        issuer: str = "signup-service",
    ) -> None:
        self._secret_key = secret_key
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._algorithm = algorithm
        self._issuer = issuer

    def issue(self, user_id: str) -> TokenPair:
        """
        Issue an access/refresh token pair for a user.

        Raises:
            TokenIssuanceFailed: no signing key configured or signing failed
        """
        if not self._secret_key:
            logger.error("Token signing key is not configured")
            raise TokenIssuanceFailed("signing key unavailable")

        now = datetime.now(timezone.utc)
        try:
            access_token = self._encode(user_id, ACCESS, now, self._access_ttl)
            refresh_token = self._encode(user_id, REFRESH, now, self._refresh_ttl)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            logger.error("Token signing failed for user %s: %s", user_id, exc)
            raise TokenIssuanceFailed("token signing failed") from exc

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_ttl=self._access_ttl,
            refresh_ttl=self._refresh_ttl,
        )

    def decode(self, token: str, expected_type: str = ACCESS) -> dict[str, Any]:
        """
        Verify a token issued by this issuer and return its claims.

        Raises:
            InvalidToken: bad signature, expired, wrong issuer or wrong type
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "jti"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken("token has expired") from exc
        except jwt.PyJWTError as exc:
            raise InvalidToken("invalid token") from exc

        if claims.get("type") != expected_type:
            raise InvalidToken(f"expected {expected_type} token")
        return claims

    def _encode(self, user_id: str, token_type: str, now: datetime, ttl: timedelta) -> str:
        payload = {
            "iss": self._issuer,
            "sub": user_id,
            "iat": now,
            "exp": now + ttl,
            "jti": str(uuid.uuid4()),
            "type": token_type,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
