"""Session Policy: pure route classification and gate decisions for the session guard.

Invariants:
    - Every path maps to exactly one RouteClass
    - A prefix matches the path itself and its descendants only ("/dashboard" does not match "/dashboards")
    - Public routes always pass, regardless of session state
    - Protected pages redirect to login with ?from=<path>; protected APIs never redirect
    - The login page is never protected, so the redirect cannot loop
    - Authorization header wins over the `token` cookie when both are present

Design Decisions:
    - Pure functions over middleware-embedded logic: testable without an ASGI app
    - Bearer scheme matched case-sensitively, as sent by the web client
"""

from urllib.parse import urlencode

from app.core.domain_types import GuardAction, RouteClass

API_PREFIX = "/api/v1"
PUBLIC_API_SUFFIXES = ("/auth/login", "/auth/register", "/auth/verify-email", "/health")
BEARER_PREFIX = "Bearer "
SESSION_COOKIE = "token"


def _matches_prefix(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(prefix + "/")


def classify_path(
    path: str, api_prefix: str, protected_page_prefixes: list[str],
) -> RouteClass:
    """Classify a request path into public/protected page/api."""
    if _matches_prefix(path, api_prefix):
        public = (api_prefix.rstrip("/") + s for s in PUBLIC_API_SUFFIXES)
        if any(_matches_prefix(path, p) for p in public):
            return RouteClass.PUBLIC_API
        return RouteClass.PROTECTED_API
    if any(_matches_prefix(path, p) for p in protected_page_prefixes):
        return RouteClass.PROTECTED_PAGE
    return RouteClass.PUBLIC_PAGE


def decide_guard_action(route_class: RouteClass, has_user: bool) -> GuardAction:
    """Decide what the guard does; never mutates anything."""
    if has_user:
        return GuardAction.PASS
    if route_class is RouteClass.PROTECTED_PAGE:
        return GuardAction.REDIRECT_TO_LOGIN
    if route_class is RouteClass.PROTECTED_API:
        return GuardAction.REJECT_UNAUTHORIZED
    return GuardAction.PASS


def login_redirect_target(login_path: str, original_path: str) -> str:
    """Build the login URL that preserves the original path."""
    return f"{login_path}?{urlencode({'from': original_path})}"


def extract_token(authorization: str | None, cookie_token: str | None) -> str | None:
    """Pick the session token from the request carriers."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token
    if cookie_token:
        return cookie_token
    return None
