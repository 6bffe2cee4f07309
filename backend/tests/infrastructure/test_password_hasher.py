"""Password Hasher: bcrypt hashing off the event loop."""

import pytest

from app.infrastructure.password_hasher import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


async def test_hash_then_verify(hasher):
    hashed = await hasher.hash("Secret1!")
    assert hashed != "Secret1!"
    assert await hasher.verify("Secret1!", hashed)
    assert not await hasher.verify("Secret2!", hashed)


async def test_same_password_gets_distinct_salts(hasher):
    assert await hasher.hash("Secret1!") != await hasher.hash("Secret1!")


def test_cost_factor_is_embedded(hasher):
    assert hasher.hash_sync("Secret1!").startswith("$2b$04$")


def test_malformed_hash_does_not_raise():
    assert PasswordHasher.verify_sync("Secret1!", "not-a-bcrypt-hash") is False


def test_long_passwords_are_accepted(hasher):
    long_password = "Aa1!" * 40
    hashed = hasher.hash_sync(long_password)
    assert PasswordHasher.verify_sync(long_password, hashed)
