"""Credential Store: registration, authentication and profile lookup.

Invariants:
    - register() creates an unverified user with token + expiry and sends exactly one mail
    - Duplicate email -> ConflictError, including the insert race (unique constraint)
    - authenticate() never signs a token for an unverified user
    - Unknown email and wrong password raise the same InvalidCredentialsError

Design Decisions:
    - The unverified check runs before the password comparison (observed order). This
      lets a caller learn that an address is registered-but-unverified (403 vs 401);
      kept as-is and recorded as a known risk
    - Hashing goes through the PasswordHashing protocol (bcrypt, off the event loop)
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.boundary_protocols import PasswordHashing
from app.core.domain_types import SessionClaim, UserId
from app.core.errors import (
    ConflictError, EmailNotVerifiedError, InvalidCredentialsError, ResourceNotFoundError,
)
from app.infrastructure.token_service import TokenService
from app.models.household import Household
from app.models.user import User
from app.services.verification_workflow import VerificationWorkflow

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedSession:
    user: User
    token: str
    claim: SessionClaim


class CredentialStore:
    """User identity persistence plus the login check."""

    def __init__(
        self,
        db: AsyncSession,
        hasher: PasswordHashing,
        tokens: TokenService,
        verification: VerificationWorkflow,
    ):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens
        self.verification = verification

    async def register(self, email: str, password: str, name: str | None) -> User:
        existing = await self.db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("User already exists")

        ticket = self.verification.new_ticket()
        user = User(
            email=email,
            password_hash=await self.hasher.hash(password),
            name=name,
            email_verified=False,
            verification_token=ticket.token,
            verification_expires_at=ticket.expires_at,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")

        logger.info("User registered", extra={"user_id": user.id})
        await self.verification.dispatch(user)
        return user

    async def authenticate(self, email: str, password: str) -> AuthenticatedSession:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.household))
            .where(User.email == email)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise InvalidCredentialsError()
        if not user.email_verified:
            raise EmailNotVerifiedError()
        if not await self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        token, claim = self.tokens.issue(UserId(user.id), user.email)
        logger.info("User signed in", extra={"user_id": user.id})
        return AuthenticatedSession(user=user, token=token, claim=claim)

    async def get_profile(self, user_id: UserId) -> User:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.household).selectinload(Household.members))
            .where(User.id == user_id)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ResourceNotFoundError("User")
        return user
