"""Ledger Rules: signed deltas, replayed balances, pagination math."""

from decimal import Decimal

import pytest

from app.core.domain_types import TransactionType
from app.core.ledger_rules import expected_balance, page_count, page_offset, signed_delta


def test_income_credits():
    assert signed_delta(Decimal("100"), TransactionType.INCOME) == Decimal("100")


def test_expense_and_transfer_debit():
    assert signed_delta(Decimal("40"), TransactionType.EXPENSE) == Decimal("-40")
    assert signed_delta(Decimal("30"), TransactionType.TRANSFER) == Decimal("-30")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
def test_non_positive_amount_rejected(amount):
    with pytest.raises(ValueError):
        signed_delta(amount, TransactionType.INCOME)


def test_expected_balance_replays_entries():
    entries = [
        (Decimal("100"), TransactionType.INCOME),
        (Decimal("40"), TransactionType.EXPENSE),
        (Decimal("0.10"), TransactionType.TRANSFER),
    ]
    assert expected_balance(Decimal("5.00"), entries) == Decimal("64.90")


def test_expected_balance_of_nothing_is_initial():
    assert expected_balance(Decimal("-20.00"), []) == Decimal("-20.00")


def test_page_offset_is_one_based():
    assert page_offset(1, 50) == 0
    assert page_offset(2, 10) == 10


@pytest.mark.parametrize("total,limit,pages", [(0, 50, 0), (1, 50, 1), (25, 10, 3), (30, 10, 3)])
def test_page_count_rounds_up(total, limit, pages):
    assert page_count(total, limit) == pages
