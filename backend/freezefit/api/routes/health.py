"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

from fastapi import APIRouter, Depends, status

from freezefit.api.envelope import fail_with, ok
from freezefit.infrastructure.database import DatabaseSessionManager, get_db_manager

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check."""
    return ok({"status": "healthy", "service": "freezefit-api"})


@router.get("/ready")
async def readiness_check(
    manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness check: includes database connectivity."""
    if not await manager.health_check():
        return fail_with(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Database unavailable", "NOT_READY",
        )
    return ok({"status": "ready", "checks": {"database": "healthy"}})
