"""
Signed, time-boxed tokens.

Tokens are HS256 JWTs. Each token class (activation, access, refresh) is
signed with its own secret so a token of one class never verifies as
another.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .exceptions import InvalidTokenError

ALGORITHM = "HS256"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenSecrets:
    """Signing secrets, one per token class."""

    activation: str
    access: str
    refresh: str


class TokenIssuer:
    """Issue and verify HS256 JWTs against an injectable clock."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def issue(
        self,
        payload: dict[str, Any],
        secret: str,
        ttl: timedelta | None = None,
    ) -> str:
        """
        Sign ``payload`` with ``secret``.

        Args:
            payload: Claims to embed (must be JSON-serializable)
            secret: Shared HMAC secret for the token class
            ttl: Lifetime of the token; None issues a token with no expiry

        Returns:
            Encoded JWT string
        """
        now = self._clock()
        claims = dict(payload)
        claims["iat"] = int(now.timestamp())
        if ttl is not None:
            claims["exp"] = int((now + ttl).timestamp())
        return jwt.encode(claims, secret, algorithm=ALGORITHM)

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        """
        Check signature and expiry, returning the embedded claims.

        Expiry is evaluated against the issuer's clock rather than PyJWT's
        wall clock. Signature and expiry failures raise the same error.

        Raises:
            InvalidTokenError: If the token is malformed, forged or expired
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(INVALID_TOKEN_MESSAGE) from exc

        exp = claims.get("exp")
        if exp is not None:
            if not isinstance(exp, int | float) or self._clock().timestamp() >= exp:
                raise InvalidTokenError(INVALID_TOKEN_MESSAGE)
        return claims
