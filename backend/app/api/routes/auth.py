"""Auth Routes: registration, login/logout, profile and email verification.

Invariants:
    - Login sets the `token` cookie: httpOnly, SameSite=Lax, path /, 7-day max-age,
      Secure only in production
    - Resend answers the same message whether or not the address is pending
    - Unknown email and wrong password give the same 401 body
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.dependencies import (
    get_credential_store, get_current_claim, get_verification_workflow,
)
from app.config import get_settings
from app.core.domain_types import SessionClaim
from app.core.errors import InvalidInputError
from app.core.session_policy import API_PREFIX, SESSION_COOKIE
from app.schemas.auth import (
    HouseholdDetailOut, HouseholdOut, LoginRequest, LoginResponse, MeResponse,
    RegisterRequest, RegisterResponse, ResendVerificationRequest, UserOut,
)
from app.schemas.common import MessageResponse
from app.services.credential_store import CredentialStore
from app.services.verification_workflow import VerificationWorkflow

logger = logging.getLogger(__name__)
router = APIRouter(prefix=f"{API_PREFIX}/auth", tags=["auth"])

REGISTERED_MESSAGE = "Account created. Please verify your email before signing in."
SIGNED_IN_MESSAGE = "Signed in"
SIGNED_OUT_MESSAGE = "Signed out"
VERIFIED_MESSAGE = "Email verified. You can now sign in."
RESEND_MESSAGE = (
    "If that address belongs to an account awaiting verification, "
    "a new verification email is on its way."
)


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    user = await store.register(body.email, body.password, body.name)
    return RegisterResponse(user=UserOut.from_model(user), message=REGISTERED_MESSAGE)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    store: CredentialStore = Depends(get_credential_store),
):
    session = await store.authenticate(body.email, body.password)
    settings = get_settings()
    response.set_cookie(
        SESSION_COOKIE,
        session.token,
        max_age=settings.session_ttl_days * 24 * 3600,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    household = session.user.household
    return LoginResponse(
        user=UserOut.from_model(session.user),
        household=HouseholdOut.from_model(household) if household else None,
        message=SIGNED_IN_MESSAGE,
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    claim: SessionClaim = Depends(get_current_claim),
):
    response.delete_cookie(SESSION_COOKIE, path="/")
    logger.info("User signed out", extra={"user_id": claim.user_id})
    return MessageResponse(message=SIGNED_OUT_MESSAGE)


@router.get("/me", response_model=MeResponse)
async def me(
    claim: SessionClaim = Depends(get_current_claim),
    store: CredentialStore = Depends(get_credential_store),
):
    user = await store.get_profile(claim.user_id)
    household = user.household
    return MeResponse(
        user=UserOut.from_model(user),
        household=HouseholdDetailOut.from_model(household) if household else None,
    )


@router.get("/verify-email", response_model=MessageResponse)
async def verify_email(
    token: str | None = Query(None),
    verification: VerificationWorkflow = Depends(get_verification_workflow),
):
    if not token:
        raise InvalidInputError("Verification token required")
    await verification.consume(token)
    return MessageResponse(message=VERIFIED_MESSAGE)


@router.post("/verify-email/resend", response_model=MessageResponse)
async def resend_verification(
    body: ResendVerificationRequest,
    verification: VerificationWorkflow = Depends(get_verification_workflow),
):
    await verification.reissue(body.email)
    return MessageResponse(message=RESEND_MESSAGE)
