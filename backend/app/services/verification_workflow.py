"""Verification Workflow: issue, mail and atomically consume one-time email tokens.

Invariants:
    - consume() succeeds at most once per token: the final UPDATE is conditioned on
      token, expiry > now and email_verified = false, and must touch exactly one row
    - Success clears token and expiry together and sets email_verified
    - Every failure surfaces as InvalidVerificationTokenError; the reason
      (unknown / expired / already consumed) is logged, never returned
    - reissue() answers identically whether or not the address exists

Design Decisions:
    - Lookup + pure predicate (core/verification_rules) for diagnostics, conditional
      UPDATE as the single-consumer guard
    - Mail is sent after the user row is committed; a failed send leaves the user
      unverified and recoverable through reissue()
"""

import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.boundary_protocols import Notifier
from app.core.errors import InvalidVerificationTokenError
from app.core.verification_rules import VerificationTicket, is_consumable, issue_ticket
from app.models.user import User

logger = logging.getLogger(__name__)


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VerificationWorkflow:
    """Email ownership proof for newly registered users."""

    def __init__(
        self, db: AsyncSession, notifier: Notifier, ttl: timedelta, base_url: str,
    ):
        self.db = db
        self.notifier = notifier
        self.ttl = ttl
        self.base_url = base_url.rstrip("/")

    def new_ticket(self, now: datetime | None = None) -> VerificationTicket:
        return issue_ticket(now or datetime.now(timezone.utc), self.ttl)

    def link_for(self, token: str) -> str:
        return f"{self.base_url}/verify-email?{urlencode({'token': token})}"

    async def dispatch(self, user: User) -> bool:
        """Mail the user's outstanding token. One message per call."""
        if not user.verification_token:
            return False
        delivered = await self.notifier.send_verification(
            user.email, user.name, self.link_for(user.verification_token),
        )
        if not delivered:
            logger.warning(
                "Verification email not delivered",
                extra={"user_id": user.id, "reason": "notifier_returned_false"},
            )
        return delivered

    async def consume(self, token: str, now: datetime | None = None) -> User:
        """Verify the owner of `token`. Raises InvalidVerificationTokenError."""
        now = now or datetime.now(timezone.utc)
        if not token:
            raise InvalidVerificationTokenError()

        result = await self.db.execute(
            select(User).where(User.verification_token == token),
        )
        user = result.scalar_one_or_none()
        if user is None:
            logger.warning(
                "Verification rejected", extra={"reason": "unknown_or_consumed_token"},
            )
            raise InvalidVerificationTokenError()

        if not is_consumable(
            token, user.verification_token, as_utc(user.verification_expires_at), now,
        ):
            logger.warning(
                "Verification rejected",
                extra={"user_id": user.id, "reason": "expired_token"},
            )
            raise InvalidVerificationTokenError()

        result = await self.db.execute(
            update(User)
            .where(User.id == user.id)
            .where(User.verification_token == token)
            .where(User.verification_expires_at > now)
            .where(User.email_verified.is_(False))
            .values(
                email_verified=True,
                verification_token=None,
                verification_expires_at=None,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            logger.warning(
                "Verification rejected",
                extra={"user_id": user.id, "reason": "consumed_concurrently"},
            )
            raise InvalidVerificationTokenError()

        await self.db.commit()
        await self.db.refresh(user)
        logger.info("Email verified", extra={"user_id": user.id})
        return user

    async def reissue(self, email: str, now: datetime | None = None) -> None:
        """Replace an unverified user's token and mail it again; silent otherwise."""
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None or user.email_verified:
            logger.info("Verification resend ignored", extra={"reason": "no_pending_user"})
            return

        ticket = self.new_ticket(now)
        user.verification_token = ticket.token
        user.verification_expires_at = ticket.expires_at
        await self.db.commit()
        await self.dispatch(user)
