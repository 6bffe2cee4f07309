"""Root conftest: shared test configuration."""

import os

# Never sign test tokens with a real secret or hit a real database
os.environ.setdefault("JWT_SECRET", "test-signing-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
# Minimum bcrypt cost keeps auth flows fast
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("SMTP_HOST", "")
