"""Session Guard: HTTP middleware that gates every request on a valid session.

Invariants:
    - Runs before routing; the decision comes from core/session_policy (pure)
    - A verified claim is attached to request.state.claim for downstream handlers
    - Protected pages without a session -> 307 to the login page with ?from=<path>
    - Protected APIs without a session -> 401 JSON, never a redirect
    - Invalid, expired and tampered tokens are treated exactly like a missing one

Design Decisions:
    - @app.middleware("http") over a BaseHTTPMiddleware subclass: one function, no state
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.config import Settings
from app.core.domain_types import GuardAction
from app.core.errors import UnauthorizedError
from app.core.session_policy import (
    API_PREFIX, SESSION_COOKIE, classify_path, decide_guard_action,
    extract_token, login_redirect_target,
)

logger = logging.getLogger(__name__)


def register_session_guard(app: FastAPI, settings: Settings) -> None:
    """Install the session guard on `app`."""

    @app.middleware("http")
    async def session_guard(request: Request, call_next):
        token = extract_token(
            request.headers.get("authorization"),
            request.cookies.get(SESSION_COOKIE),
        )
        claim = request.app.state.token_service.verify(token) if token else None
        request.state.claim = claim

        path = request.url.path
        route_class = classify_path(path, API_PREFIX, settings.protected_page_prefixes)
        action = decide_guard_action(route_class, claim is not None)

        if action is GuardAction.REDIRECT_TO_LOGIN:
            logger.info(
                "Redirecting anonymous page request",
                extra={"path": path, "reason": "no_session"},
            )
            return RedirectResponse(
                login_redirect_target(settings.login_path, path),
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
            )
        if action is GuardAction.REJECT_UNAUTHORIZED:
            logger.info(
                "Rejecting anonymous API request",
                extra={"path": path, "method": request.method, "reason": "no_session"},
            )
            error = UnauthorizedError()
            return JSONResponse(status_code=error.http_status, content=error.to_response())

        return await call_next(request)
