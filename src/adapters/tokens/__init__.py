"""Token adapters - Session token implementations."""

from .jwt_issuer import InvalidToken, JWTTokenIssuer

__all__ = ["InvalidToken", "JWTTokenIssuer"]
