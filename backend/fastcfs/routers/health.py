"""Health check endpoints for load balancers and monitoring."""

import logging
from datetime import datetime

import redis.asyncio as redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fastcfs.config import settings
from fastcfs.database import engine
from fastcfs.utils.cache import ping_redis

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness: 200 while the process is serving (no DB/Redis check)."""
    return {
        "status": "ok",
        "service": "FastCFS",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness: 200 only if the database and Redis both answer."""
    checks = {"service": "ok", "database": "unknown", "redis": "unknown"}
    healthy = True

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.error("Readiness: database check failed: %s", e)
        checks["database"] = f"error: {str(e)[:100]}"
        healthy = False

    try:
        await ping_redis()
        checks["redis"] = "ok"
    except (redis.RedisError, OSError) as e:
        logger.error("Readiness: redis check failed: %s", e)
        checks["redis"] = f"error: {str(e)[:100]}"
        healthy = False

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "FastCFS",
            "checks": checks,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
