"""Ledger Mutator: accounts, transactions and the balance effect they carry.

Invariants:
    - Account lookups are filtered by owner: another user's account is NotFound,
      indistinguishable from a missing one
    - create_transaction is ONE unit of work: ledger row insert (phase 1) and balance
      increment (phase 2) commit together or not at all
    - The balance increment is an in-place SQL expression (balance = balance + delta),
      so concurrent writers never overwrite each other's deltas
    - Listing is newest occurrence first, 1-based pages, total counted over the same filter

Design Decisions:
    - TRANSFER debits its single account (core/ledger_rules.signed_delta)
    - Balance kept as a stored running total; drift is prevented by the
      single commit rather than recomputed on read
    - A client disconnect before commit leaves nothing behind: the session rolls back on close
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.domain_types import (
    AccountId, AccountType, CategoryId, TransactionType, UserId,
)
from app.core.errors import ResourceNotFoundError
from app.core.ledger_rules import page_offset, signed_delta
from app.models.account import Account
from app.models.category import Category
from app.models.transaction import Transaction
from app.models.user import User
from app.services.household_service import HouseholdService

logger = logging.getLogger(__name__)


@dataclass
class TransactionPage:
    items: list[Transaction]
    total: int


class LedgerMutator:
    """Per-request ledger operations for one authenticated user."""

    def __init__(self, db: AsyncSession, households: HouseholdService):
        self.db = db
        self.households = households

    # ─── Accounts ────────────────────────────────────────────────

    async def create_account(
        self, user_id: UserId, name: str, account_type: AccountType, balance: Decimal,
    ) -> Account:
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User")

        household_id = await self.households.ensure(user)
        account = Account(
            user_id=user_id,
            household_id=household_id,
            name=name,
            type=account_type.value,
            balance=balance,
        )
        self.db.add(account)
        await self.db.commit()
        logger.info(
            "Account created",
            extra={"user_id": user_id, "account_id": account.id, "household_id": household_id},
        )
        return account

    async def list_accounts(self, user_id: UserId) -> list[Account]:
        result = await self.db.execute(
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.created_at.desc())
        )
        return list(result.scalars().all())

    async def _owned_account(self, user_id: UserId, account_id: AccountId) -> Account:
        result = await self.db.execute(
            select(Account)
            .where(Account.id == account_id)
            .where(Account.user_id == user_id)
        )
        account = result.scalar_one_or_none()
        if account is None:
            raise ResourceNotFoundError("Account")
        return account

    # ─── Transactions ────────────────────────────────────────────

    async def create_transaction(
        self,
        user_id: UserId,
        account_id: AccountId,
        category_id: CategoryId,
        amount: Decimal,
        txn_type: TransactionType,
        occurred_at: datetime | None = None,
        description: str | None = None,
    ) -> Transaction:
        account = await self._owned_account(user_id, account_id)
        category = await self.db.get(Category, category_id)
        if category is None:
            raise ResourceNotFoundError("Category")

        delta = signed_delta(amount, txn_type)
        txn = Transaction(
            user_id=user_id,
            account=account,
            category=category,
            amount=amount,
            type=txn_type.value,
            description=description,
            occurred_at=occurred_at or datetime.now(timezone.utc),
        )

        # phase 1: ledger row
        self.db.add(txn)
        await self.db.flush()
        # phase 2: balance effect, same DB transaction
        await self.db.execute(
            update(Account)
            .where(Account.id == account.id)
            .values(balance=Account.balance + delta)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        logger.info(
            "Transaction recorded",
            extra={"user_id": user_id, "account_id": account.id, "transaction_id": txn.id},
        )
        return txn

    async def list_transactions(
        self,
        user_id: UserId,
        account_id: AccountId | None = None,
        txn_type: TransactionType | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> TransactionPage:
        filters = [Transaction.user_id == user_id]
        if account_id is not None:
            filters.append(Transaction.account_id == account_id)
        if txn_type is not None:
            filters.append(Transaction.type == txn_type.value)

        total = await self.db.scalar(
            select(func.count()).select_from(Transaction).where(*filters),
        )
        result = await self.db.execute(
            select(Transaction)
            .options(
                selectinload(Transaction.account),
                selectinload(Transaction.category),
            )
            .where(*filters)
            .order_by(Transaction.occurred_at.desc(), Transaction.created_at.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        return TransactionPage(items=list(result.scalars().all()), total=total or 0)
