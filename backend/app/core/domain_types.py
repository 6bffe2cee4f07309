"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, HouseholdId, AccountId, CategoryId, TransactionId wrap UUIDs
    - Money is always Decimal, never float
    - All valid states encoded as Enums, no raw string matching
    - SessionClaim is immutable; expires_at = issued_at + session lifetime

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to DB String columns without custom encoders
    - Enum values are the wire values (CHECKING, INCOME, ...), shared by API and DB
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
HouseholdId = NewType("HouseholdId", UUID)
AccountId = NewType("AccountId", UUID)
CategoryId = NewType("CategoryId", UUID)
TransactionId = NewType("TransactionId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Money = NewType("Money", Decimal)


# ─── Enums ───────────────────────────────────────────────────────

class AccountType(str, Enum):
    """Kinds of account a household can hold."""
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT_CARD = "CREDIT_CARD"
    INVESTMENT = "INVESTMENT"
    CASH = "CASH"
    OTHER = "OTHER"


class TransactionType(str, Enum):
    """Ledger entry kinds. TRANSFER debits its single account."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class CategoryType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class RouteClass(str, Enum):
    """Every request path falls into exactly one of these."""
    PUBLIC_PAGE = "public_page"
    PROTECTED_PAGE = "protected_page"
    PUBLIC_API = "public_api"
    PROTECTED_API = "protected_api"


class GuardAction(str, Enum):
    """What the session guard does with a request."""
    PASS = "pass"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    REJECT_UNAUTHORIZED = "reject_unauthorized"


# ─── Claims ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class SessionClaim:
    """Facts asserted by a signed session token."""
    user_id: UserId
    email: str
    issued_at: datetime
    expires_at: datetime
