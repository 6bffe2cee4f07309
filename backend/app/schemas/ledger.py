"""Ledger Schemas: household, account, category and transaction payloads.

Invariants:
    - Transaction amount > 0 with at most 2 decimals; the sign comes from type
    - Account opening balance may be negative (credit cards) and defaults to 0
    - Transaction dates are normalized to UTC; naive values are taken as UTC
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import Field, field_validator

from app.core.domain_types import AccountType, CategoryType, TransactionType
from app.models.account import Account
from app.models.category import Category
from app.models.transaction import Transaction
from app.schemas.auth import HouseholdOut
from app.schemas.common import CamelModel, MoneyOut


class HouseholdCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class AccountCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    type: AccountType
    balance: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class TransactionCreate(CamelModel):
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    type: TransactionType
    category_id: UUID
    account_id: UUID
    date: datetime | None = None
    description: str | None = Field(None, max_length=500)

    @field_validator("date")
    @classmethod
    def to_utc(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# --- Responses ---------------------------------------------------------------

class AccountOut(CamelModel):
    id: UUID
    name: str
    type: AccountType
    balance: MoneyOut
    household_id: UUID
    created_at: datetime

    @classmethod
    def from_model(cls, account: Account) -> "AccountOut":
        return cls(
            id=account.id,
            name=account.name,
            type=AccountType(account.type),
            balance=account.balance,
            household_id=account.household_id,
            created_at=account.created_at,
        )


class AccountSummary(CamelModel):
    name: str
    type: AccountType


class CategorySummary(CamelModel):
    name: str
    color: str | None
    icon: str | None


class CategoryOut(CategorySummary):
    id: UUID
    type: CategoryType
    is_default: bool

    @classmethod
    def from_model(cls, category: Category) -> "CategoryOut":
        return cls(
            id=category.id,
            name=category.name,
            type=CategoryType(category.type),
            color=category.color,
            icon=category.icon,
            is_default=category.is_default,
        )


class TransactionOut(CamelModel):
    id: UUID
    amount: MoneyOut
    type: TransactionType
    description: str | None
    date: datetime
    account_id: UUID
    category_id: UUID
    created_at: datetime
    account: AccountSummary
    category: CategorySummary

    @classmethod
    def from_model(cls, txn: Transaction) -> "TransactionOut":
        return cls(
            id=txn.id,
            amount=txn.amount,
            type=TransactionType(txn.type),
            description=txn.description,
            date=txn.occurred_at,
            account_id=txn.account_id,
            category_id=txn.category_id,
            created_at=txn.created_at,
            account=AccountSummary(
                name=txn.account.name, type=AccountType(txn.account.type),
            ),
            category=CategorySummary(
                name=txn.category.name,
                color=txn.category.color,
                icon=txn.category.icon,
            ),
        )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class HouseholdEnvelope(CamelModel):
    household: HouseholdOut


class AccountEnvelope(CamelModel):
    account: AccountOut


class AccountList(CamelModel):
    accounts: list[AccountOut]


class CategoryList(CamelModel):
    categories: list[CategoryOut]


class TransactionEnvelope(CamelModel):
    transaction: TransactionOut


class TransactionList(CamelModel):
    transactions: list[TransactionOut]
    pagination: Pagination
