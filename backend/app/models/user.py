"""User ORM: identity, credentials and email-verification state.

Invariants:
    - email is unique (DB constraint); registration races surface as IntegrityError
    - email_verified starts False and flips to True exactly once
    - verification_token and verification_expires_at are set together and cleared together
    - household_id is nullable (0 or 1 household per user)

Design Decisions:
    - password_hash stores the full bcrypt string (salt and cost embedded)
    - verification_token indexed: consumption looks users up by token
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class User(Base):
    """Registered person; may belong to one household."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    email_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    verification_token: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True,
    )
    verification_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    household_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("households.id"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    household: Mapped[Optional["Household"]] = relationship(
        "Household", foreign_keys=[household_id], back_populates="members",
    )
