"""Token Service: stateless signed session tokens (JWT, HS256).

Invariants:
    - Claims: userId, email, iat, exp; exp = iat + session lifetime (7 days by default)
    - verify() returns None for ANY failure (malformed, bad signature, expired, missing claims)
      so callers cannot tell tampering from expiry
    - The secret is injected at construction and never re-read

Design Decisions:
    - python-jose for encode/decode: validates signature and exp in one call
    - No revocation list: a token stays valid until exp even after logout
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import jwt, JWTError

from app.core.domain_types import SessionClaim, UserId

logger = logging.getLogger(__name__)


class TokenService:
    """Signs and verifies session claims with a server-held symmetric key."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.lifetime = lifetime

    def issue(
        self, user_id: UserId, email: str, issued_at: datetime | None = None,
    ) -> tuple[str, SessionClaim]:
        """Sign a fresh claim for the user; returns (token, claim)."""
        issued_at = (issued_at or datetime.now(timezone.utc)).replace(microsecond=0)
        claim = SessionClaim(
            user_id=user_id,
            email=email,
            issued_at=issued_at,
            expires_at=issued_at + self.lifetime,
        )
        return self.sign(claim), claim

    def sign(self, claim: SessionClaim) -> str:
        payload = {
            "userId": str(claim.user_id),
            "email": claim.email,
            "iat": int(claim.issued_at.timestamp()),
            "exp": int(claim.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaim | None:
        """Decode and validate a token; None when it cannot be trusted."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            return SessionClaim(
                user_id=UserId(UUID(payload["userId"])),
                email=payload["email"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, KeyError, ValueError, TypeError):
            logger.debug("Rejected session token")
            return None
