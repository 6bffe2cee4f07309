"""Household Ledger API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Every request passes the session guard before reaching a route
    - Global error handlers map LedgerError -> {"error", "code"} JSON responses
    - CORS configured from settings (not hardcoded), with credentials for the cookie
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Token service, notifier and password hasher built once at import and kept on
      app.state; tests swap them there
    - SQLite URLs get tables created at startup; server databases are migrated by Alembic
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import accounts, auth, categories, health, households, transactions
from app.api.session_guard import register_session_guard
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.notifier import build_notifier
from app.infrastructure.observability import setup_logging
from app.infrastructure.password_hasher import PasswordHasher
from app.infrastructure.token_service import TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_tables()
    logger.info("Household Ledger API started")
    yield
    logger.info("Household Ledger API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Household Ledger API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.state.token_service = TokenService(
    settings.jwt_secret,
    settings.jwt_algorithm,
    timedelta(days=settings.session_ttl_days),
)
app.state.notifier = build_notifier(settings)
app.state.password_hasher = PasswordHasher(settings.password_hash_rounds)

# Middleware added last runs outermost: CORS wraps the guard
register_session_guard(app, settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(households.router)
app.include_router(accounts.router)
app.include_router(transactions.router)
app.include_router(categories.router)
