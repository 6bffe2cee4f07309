"""Verification Rules: token shape and the consumable predicate."""

from datetime import datetime, timedelta, timezone

from app.core.verification_rules import TOKEN_BYTES, is_consumable, issue_ticket

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_ticket_is_hex_with_expiry():
    ticket = issue_ticket(NOW, timedelta(hours=24))
    assert len(ticket.token) == TOKEN_BYTES * 2
    int(ticket.token, 16)
    assert ticket.expires_at == NOW + timedelta(hours=24)


def test_tickets_are_unique():
    assert issue_ticket(NOW, timedelta(hours=1)).token != issue_ticket(NOW, timedelta(hours=1)).token


def test_matching_unexpired_token_is_consumable():
    assert is_consumable("abc", "abc", NOW + timedelta(seconds=1), NOW)


def test_expiry_boundary_is_exclusive():
    assert not is_consumable("abc", "abc", NOW, NOW)


def test_mismatch_is_not_consumable():
    assert not is_consumable("abd", "abc", NOW + timedelta(hours=1), NOW)


def test_cleared_state_is_never_consumable():
    assert not is_consumable("abc", None, None, NOW)
    assert not is_consumable("abc", "abc", None, NOW)
    assert not is_consumable("", "abc", NOW + timedelta(hours=1), NOW)
