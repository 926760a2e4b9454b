"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (data store reachable)
"""

from datetime import datetime, timezone
from typing import Any, Dict
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.database import RestStore, get_store
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_store(store: RestStore) -> Dict[str, Any]:
    """Check the REST data store answers"""
    start = time.time()
    reachable = await store.ping()
    latency = (time.time() - start) * 1000
    return {
        "status": "healthy" if reachable else "unhealthy",
        "latency_ms": round(latency, 2),
    }


@router.get("/live")
async def liveness_check(settings: Settings = Depends(get_settings)):
    """
    Liveness check - indicates the application is running.
    Returns 200 if the process is alive.
    """
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/ready")
async def readiness_check(store: RestStore = Depends(get_store)):
    """
    Readiness check - 200 only when the data store is reachable, 503 otherwise.
    """
    store_check = await check_store(store)
    is_ready = store_check["status"] == "healthy"

    body = {
        "status": "ready" if is_ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"store": store_check},
    }

    if not is_ready:
        logger.warning(f"[HealthCheck] Readiness check failed: {body}")
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)

    return body
