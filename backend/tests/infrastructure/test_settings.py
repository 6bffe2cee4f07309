"""Settings: production refuses a missing or placeholder signing secret."""

import pytest
from pydantic import ValidationError

from app.config import DEV_JWT_SECRET, Settings


def test_production_without_secret_env_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(environment="production", _env_file=None)


@pytest.mark.parametrize("secret", ["", "   ", DEV_JWT_SECRET])
def test_production_rejects_placeholder_secrets(secret):
    with pytest.raises(ValidationError):
        Settings(environment="Production", jwt_secret=secret, _env_file=None)


def test_production_accepts_private_secret():
    settings = Settings(
        environment="production", jwt_secret="a-long-private-value", _env_file=None,
    )
    assert settings.is_production
    assert settings.jwt_secret == "a-long-private-value"


def test_development_keeps_default_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    settings = Settings(environment="development", _env_file=None)
    assert settings.jwt_secret == DEV_JWT_SECRET
    assert not settings.is_production


def test_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@h:5432/d", _env_file=None)
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/d"
