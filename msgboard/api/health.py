"""
Health check endpoints for liveness and readiness probes.
"""
from fastapi import APIRouter, Request, Response

from msgboard.core.config import get_settings
from msgboard.core.database import check_db_connection
from msgboard.core.logging import get_logger
from msgboard.schemas.message import HealthResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Always returns 200 to indicate the service is alive."
)
async def liveness() -> HealthResponse:
    """
    Liveness probe - always returns 200.
    
    Used by orchestrators to check if the service is running.
    """
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness probe",
    description="Returns 200 if the service is ready to handle traffic."
)
async def readiness(request: Request, response: Response) -> HealthResponse:
    """
    Readiness probe - checks if the service can handle traffic.
    
    Checks:
    - Database is reachable
    - Statistics reporter is running, when enabled
    """
    settings = get_settings()
    checks = {}
    is_ready = True
    
    db_ok = check_db_connection()
    checks["database"] = "ok" if db_ok else "failed"
    if not db_ok:
        is_ready = False
        logger.warning("Readiness check failed: database not reachable")
    
    if settings.stats_enabled:
        reporter = getattr(request.app.state, "reporter", None)
        reporter_ok = reporter is not None and reporter.is_running
        checks["statistics_reporter"] = "ok" if reporter_ok else "not running"
        if not reporter_ok:
            is_ready = False
            logger.warning("Readiness check failed: statistics reporter not running")
    else:
        checks["statistics_reporter"] = "disabled"
    
    if is_ready:
        return HealthResponse(status="ok", checks=checks)
    else:
        response.status_code = 503
        return HealthResponse(status="not ready", checks=checks)
