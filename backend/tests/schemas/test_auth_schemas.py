"""Auth schemas: registration policy, email normalization, camelCase wire names.

Invariants:
    - Password needs 8+ chars with lower, upper, digit and one of @$!%*?&.
    - confirmPassword is optional but must match when present
    - Emails are trimmed and lower-cased
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.schemas.auth import LoginRequest, RegisterRequest, UserOut


def _register(**overrides):
    data = {"email": "a@x.com", "password": "Secret1!", "name": "Ana"}
    data.update(overrides)
    return RegisterRequest(**data)


def test_valid_registration():
    req = _register(email="  A@X.com ", name="  Ana ")
    assert req.email == "a@x.com"
    assert req.name == "Ana"


@pytest.mark.parametrize("password", [
    "Sec1!",        # too short
    "secret1!",     # no upper
    "SECRET1!",     # no lower
    "Secretxx!",    # no digit
    "Secret12",     # no special
])
def test_password_policy(password):
    with pytest.raises(ValidationError):
        _register(password=password)


def test_dot_counts_as_special_character():
    assert _register(password="Secret1.").password == "Secret1."


def test_confirm_password_must_match():
    assert _register(confirmPassword="Secret1!").confirm_password == "Secret1!"
    with pytest.raises(ValidationError):
        _register(confirmPassword="Secret2!")


@pytest.mark.parametrize("name", ["A", "  B  ", ""])
def test_name_needs_two_characters(name):
    with pytest.raises(ValidationError):
        _register(name=name)


def test_invalid_email_rejected():
    with pytest.raises(ValidationError):
        _register(email="not-an-email")


def test_login_has_no_complexity_rule():
    assert LoginRequest(email="a@x.com", password="simple").password == "simple"
    with pytest.raises(ValidationError):
        LoginRequest(email="a@x.com", password="short")


def test_user_out_serializes_camel_case():
    out = UserOut(
        id=uuid4(), email="a@x.com", name="Ana", email_verified=True,
        household_id=None, created_at=datetime.now(timezone.utc),
    )
    dumped = out.model_dump(by_alias=True)
    assert {"emailVerified", "householdId", "createdAt"} <= set(dumped)
