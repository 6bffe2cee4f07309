"""Household ORM: the shared grouping that scopes accounts to a couple.

Invariants:
    - owner_id is unique: a user owns at most one household
    - members are the users whose household_id points here
    - never deleted

Design Decisions:
    - Unique owner_id backs insert-or-ignore creation (no check-then-act race)
    - owner FK declared use_alter: users.household_id and households.owner_id form a cycle
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Household(Base):
    """Named grouping owned by exactly one user."""
    __tablename__ = "households"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", use_alter=True, name="fk_households_owner_id"),
        nullable=False,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    members: Mapped[list["User"]] = relationship(
        "User", foreign_keys="User.household_id", back_populates="household",
    )
