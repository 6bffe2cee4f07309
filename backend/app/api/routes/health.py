"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Both are public: the session guard lets /health through without a token

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the load balancer
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.session_policy import API_PREFIX
from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix=f"{API_PREFIX}/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "household-ledger-api",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed", extra={"reason": "database_unavailable"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
