"""
Health check endpoints for MermaidUI application.

Provides endpoints to check the health status of the service:
- Basic health check
- Database health check
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config.database import check_integrity
from config.settings import config
from models.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint"""
    return HealthResponse(status="ok", version=config.version)


@router.get("/health/database")
def database_health_check():
    """
    Database health check endpoint.

    Returns:
        - 200 OK: Database is reachable
        - 503 Service Unavailable: Database connection failed
    """
    is_healthy = check_integrity()
    if not is_healthy:
        logger.warning("[Health] Database check failed")

    return JSONResponse(
        status_code=200 if is_healthy else 503,
        content={
            "status": "healthy" if is_healthy else "unhealthy",
            "database_healthy": is_healthy,
            "database_message": (
                "Database connection check passed" if is_healthy
                else "Database connection check failed"
            ),
            "timestamp": int(time.time())
        }
    )
