"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - ENVIRONMENT=production requires an explicit JWT_SECRET; the dev default is rejected
    - get_settings() is cached (lru_cache), single instance per process
    - Session lifetime and verification TTL are fixed per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - The signing secret is consumed by TokenService at startup, never read from settings inside handlers
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

DEV_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://ledger:ledger@db:5432/ledger"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Runtime
    environment: str = "development"

    # Sessions
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    session_ttl_days: int = 7
    password_hash_rounds: int = 12

    # Email verification
    verification_ttl_hours: int = 24
    app_base_url: str = "http://localhost:3000"

    # Outbound mail (empty host = log links instead of sending)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    smtp_timeout_seconds: int = 10
    mail_from: str = "noreply@household-ledger.local"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Route policy
    login_path: str = "/login"
    protected_page_prefixes: list[str] = ["/dashboard", "/onboarding"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @model_validator(mode="after")
    def require_production_secret(self) -> "Settings":
        """Production refuses to start with an empty or placeholder signing secret."""
        if self.is_production and self.jwt_secret.strip() in ("", DEV_JWT_SECRET):
            raise ValueError("JWT_SECRET must be set to a private value in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
