"""Health endpoints: liveness, readiness, basic status.

Readiness probes the database over the app engine and, when events go
through Celery, the Redis broker. Probe errors are reported with
credentials masked.
"""

from datetime import datetime, timezone

import redis.asyncio as aioredis
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from user_service.config import get_logger, get_settings, mask_url_credentials

logger = get_logger(__name__)

settings = get_settings()

router = APIRouter(prefix="/health", tags=["Health"])

HEALTHY = "healthy"

# Max length of a probe error echoed in the response
_ERROR_PREVIEW = 80


def _unhealthy(error: Exception) -> str:
    return f"unhealthy: {mask_url_credentials(str(error))[:_ERROR_PREVIEW]}"


async def check_database(engine: AsyncEngine) -> str:
    """SELECT 1 over the pool."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.database_unhealthy", error=str(e))
        return _unhealthy(e)
    return HEALTHY


async def check_broker(broker_url: str) -> str:
    """PING the Redis broker."""
    client = aioredis.from_url(broker_url)
    try:
        await client.ping()
    except Exception as e:
        logger.warning("health.broker_unhealthy", error=str(e))
        return _unhealthy(e)
    finally:
        await client.aclose()
    return HEALTHY


@router.get("", summary="Health check", description="Check if API is running")
async def health_check() -> dict:
    """Basic status (no dependency checks)."""
    return {
        "status": HEALTHY,
        "version": settings.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check database and (for the Celery publisher) broker connectivity",
)
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe.

    Returns:
        200 when every check passes, else 503 with per-check status.
    """
    checks = {"database": await check_database(request.app.state.engine)}

    if settings.event_publisher_backend == "celery":
        checks["broker"] = await check_broker(settings.celery_broker_url)

    all_healthy = all(result == HEALTHY for result in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": HEALTHY if all_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": checks,
        },
    )


@router.get("/live", summary="Liveness probe")
async def liveness_check() -> dict:
    """Process is up."""
    return {"status": "alive"}
