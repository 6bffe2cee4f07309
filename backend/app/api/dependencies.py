"""Request Dependencies: per-request service wiring for route handlers.

Invariants:
    - Process-wide collaborators (token service, notifier, hasher) live on app.state
    - Services are built per request around the request's AsyncSession
    - get_current_claim only reads what the session guard attached; it never
      re-verifies the token
"""

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.boundary_protocols import Notifier, PasswordHashing
from app.core.domain_types import SessionClaim
from app.core.errors import UnauthorizedError
from app.infrastructure.database import get_db
from app.infrastructure.token_service import TokenService
from app.services.credential_store import CredentialStore
from app.services.household_service import HouseholdService
from app.services.ledger_mutator import LedgerMutator
from app.services.verification_workflow import VerificationWorkflow


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_password_hasher(request: Request) -> PasswordHashing:
    return request.app.state.password_hasher


def get_current_claim(request: Request) -> SessionClaim:
    """Claim of the signed-in user, or 401."""
    claim = getattr(request.state, "claim", None)
    if claim is None:
        raise UnauthorizedError()
    return claim


def get_verification_workflow(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> VerificationWorkflow:
    settings = get_settings()
    return VerificationWorkflow(
        db,
        notifier,
        ttl=timedelta(hours=settings.verification_ttl_hours),
        base_url=settings.app_base_url,
    )


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHashing = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
    verification: VerificationWorkflow = Depends(get_verification_workflow),
) -> CredentialStore:
    return CredentialStore(db, hasher, tokens, verification)


def get_household_service(db: AsyncSession = Depends(get_db)) -> HouseholdService:
    return HouseholdService(db)


def get_ledger_mutator(
    db: AsyncSession = Depends(get_db),
    households: HouseholdService = Depends(get_household_service),
) -> LedgerMutator:
    return LedgerMutator(db, households)
