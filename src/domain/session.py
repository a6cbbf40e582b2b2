"""
Session establisher - Maps issued tokens onto cookie directives.

Pure mapping with fixed security attributes: every cookie is scoped to
"/", Secure, HttpOnly and SameSite=Strict. The transport layer applies
the directives to its response object.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from .models import TokenPair

ACCESS_TOKEN_COOKIE = "jwt"
REFRESH_TOKEN_COOKIE = "refresh_token"


@dataclass(frozen=True)
class CookieDirective:
    """A single Set-Cookie instruction."""

    name: str
    value: str
    max_age: int
    expires: datetime
    path: str = "/"
    domain: str | None = None
    secure: bool = True
    httponly: bool = True
    samesite: str = "strict"


class SessionEstablisher:
    """Builds the access and refresh cookies for a TokenPair."""

    def __init__(self, domain: str | None = None) -> None:
        self._domain = domain

    def establish(self, tokens: TokenPair, now: datetime | None = None) -> list[CookieDirective]:
        """Return [access cookie, refresh cookie] for the given tokens."""
        now = now or datetime.now(timezone.utc)
        return [
            CookieDirective(
                name=ACCESS_TOKEN_COOKIE,
                value=tokens.access_token,
                max_age=int(tokens.access_ttl.total_seconds()),
                expires=now + tokens.access_ttl,
                domain=self._domain,
            ),
            CookieDirective(
                name=REFRESH_TOKEN_COOKIE,
                value=tokens.refresh_token,
                max_age=int(tokens.refresh_ttl.total_seconds()),
                expires=now + tokens.refresh_ttl,
                domain=self._domain,
            ),
        ]
