"""Error Handlers: global exception handlers for the ledger API.

Invariants:
    - LedgerError -> {"error": message, "code": code} with the error's HTTP status
    - RequestValidationError -> 400 {"error": "Invalid data", "code": "VALIDATION_ERROR"};
      field details are logged, not returned
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (LedgerError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so the entry point stays a wiring list
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import InternalError, InvalidInputError, LedgerError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_ledger_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_ledger_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        """Handle all domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
        }
        if isinstance(exc, InternalError):
            logger.error(f"{exc.code}: {exc.detail}", extra=extra)
        else:
            logger.info(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {_summarize(exc)}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=InvalidInputError().to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError("unhandled").to_response(),
        )


def _summarize(exc: RequestValidationError) -> list[str]:
    """Field paths and messages, without the submitted values (may hold passwords)."""
    return [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
