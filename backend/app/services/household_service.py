"""Household Service: explicit and lazy household creation without check-then-act races.

Invariants:
    - A user owns at most one household (unique owner_id)
    - A user belongs to at most one household (household_id set only while NULL)
    - Concurrent creations for the same owner yield one row; the loser reuses it
      (lazy path) or gets ConflictError (explicit path)

Design Decisions:
    - INSERT ... ON CONFLICT (owner_id) DO NOTHING RETURNING id: one statement decides
      the winner, on both PostgreSQL and SQLite
    - Linking is a conditional UPDATE (WHERE household_id IS NULL), then re-read
"""

import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import HouseholdId, UserId
from app.core.errors import ConflictError, ResourceNotFoundError
from app.models.household import Household
from app.models.user import User

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class HouseholdService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: UserId, name: str) -> Household:
        """Explicit creation; ConflictError when the user already has one."""
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User")
        if user.household_id is not None:
            raise ConflictError("You already have a household")

        household_id = await self._insert_if_absent(user_id, name)
        if household_id is None or not await self._link(user_id, household_id):
            await self.db.rollback()
            raise ConflictError("You already have a household")

        await self.db.commit()
        logger.info(
            "Household created",
            extra={"user_id": user_id, "household_id": household_id},
        )
        return await self.db.get(Household, household_id)

    async def ensure(self, user: User) -> HouseholdId:
        """Household of `user`, created on first use. Does not commit."""
        if user.household_id is not None:
            return HouseholdId(user.household_id)

        name = f"{user.name or user.email}'s household"
        created = await self._insert_if_absent(UserId(user.id), name)
        owned = await self.db.execute(
            select(Household.id).where(Household.owner_id == user.id),
        )
        await self._link(UserId(user.id), owned.scalar_one())

        current = await self.db.execute(
            select(User.household_id).where(User.id == user.id),
        )
        household_id = current.scalar_one()
        if created is not None:
            logger.info(
                "Household created lazily",
                extra={"user_id": user.id, "household_id": household_id},
            )
        return HouseholdId(household_id)

    async def _insert_if_absent(self, owner_id: UserId, name: str) -> uuid.UUID | None:
        """Id of the new household, or None when the owner already has one."""
        insert = _DIALECT_INSERTS[self.db.get_bind().dialect.name]
        stmt = (
            insert(Household.__table__)
            .values(id=uuid.uuid4(), name=name, owner_id=owner_id)
            .on_conflict_do_nothing(index_elements=["owner_id"])
            .returning(Household.__table__.c.id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _link(self, user_id: UserId, household_id: uuid.UUID) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.household_id.is_(None))
            .values(household_id=household_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
