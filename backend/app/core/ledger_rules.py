"""Ledger Rules: pure balance arithmetic and pagination math.

Invariants:
    - signed_delta(amount, INCOME) = +amount; EXPENSE and TRANSFER = -amount
    - amount must be strictly positive; the sign lives in the type, never in the amount
    - balance == initial_balance + sum(signed_delta(t)) over an account's transactions
    - Pages are 1-based; pages = ceil(total / limit), 0 when there is nothing to show

Design Decisions:
    - TRANSFER debits its single account: the schema carries one account per
      transaction, so there is no counterpart to credit
"""

from collections.abc import Iterable
from decimal import Decimal

from app.core.domain_types import TransactionType


def signed_delta(amount: Decimal, txn_type: TransactionType) -> Decimal:
    """Balance effect of one transaction on its account."""
    if amount <= 0:
        raise ValueError("amount must be positive")
    if txn_type is TransactionType.INCOME:
        return amount
    return -amount


def expected_balance(
    initial: Decimal, entries: Iterable[tuple[Decimal, TransactionType]],
) -> Decimal:
    """Replay entries over an initial balance."""
    balance = initial
    for amount, txn_type in entries:
        balance += signed_delta(amount, txn_type)
    return balance


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return -(-total // limit)
