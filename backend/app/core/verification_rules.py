"""Verification Rules: one-time email token issuance and the consumable predicate.

Invariants:
    - Tokens are 32 random bytes, hex-encoded (64 chars)
    - A token always travels with an expiry (issued_at + ttl)
    - A token is consumable iff it matches exactly and now < expiry
    - A null token or null expiry is never consumable

State machine (per user):
    UNVERIFIED(T, E) --consume(T) and now < E--> VERIFIED(None, None)
    UNVERIFIED(T, E) --consume(T') with T' != T or now >= E--> UNVERIFIED(T, E)
    VERIFIED --consume(any)--> VERIFIED
"""

import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

TOKEN_BYTES = 32


@dataclass(frozen=True)
class VerificationTicket:
    token: str
    expires_at: datetime


def issue_ticket(now: datetime, ttl: timedelta) -> VerificationTicket:
    """Fresh random token with its expiry."""
    return VerificationTicket(
        token=secrets.token_hex(TOKEN_BYTES), expires_at=now + ttl,
    )


def is_consumable(
    presented: str,
    stored_token: str | None,
    stored_expiry: datetime | None,
    now: datetime,
) -> bool:
    """Whether `presented` may verify an account holding (stored_token, stored_expiry)."""
    if not presented or stored_token is None or stored_expiry is None:
        return False
    if not hmac.compare_digest(presented, stored_token):
        return False
    return now < stored_expiry
