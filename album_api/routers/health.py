"""
Health Check 라우터.

애플리케이션과 두 저장소(관계형 DB, 사용자 문서 DB)의 상태를 확인합니다.
"""
import asyncio
import logging
import time
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from album_api.database import engine
from album_api.mongo import ping_mongo
from album_api.utils.prometheus_metrics import REGISTRY, Gauge, ready

logger = logging.getLogger("app.health")
router = APIRouter(prefix="/health", tags=["Health"])

# 저장소 확인 타임아웃 (초)
CHECK_TIMEOUT = 1.0

health_check_status = Gauge(
    "album_api_health_check_status",
    "Health check status (1=healthy, 0=unhealthy)",
    ["check_type"],
    registry=REGISTRY,
)


async def check_sql() -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_mongo() -> None:
    await ping_mongo()


async def _run_check(name: str, check) -> Dict[str, Any]:
    try:
        await asyncio.wait_for(check(), timeout=CHECK_TIMEOUT)
        return {"status": "up"}
    except asyncio.TimeoutError:
        logger.warning(f"{name} health check timeout", extra={"event": "health"})
        return {"status": "down", "error": "Timeout"}
    except Exception as e:
        logger.warning(
            f"{name} health check failed",
            extra={"event": "health", "error": str(e)[:200]},
        )
        return {"status": "down", "error": type(e).__name__}


@router.get(
    "/liveness",
    summary="Liveness probe",
)
async def liveness_probe():
    """
    애플리케이션이 살아있는지만 확인합니다. 저장소 I/O 없음.
    """
    if ready._value.get() == 0:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "shutting_down"},
        )
    return {"status": "alive"}


@router.get(
    "",
    summary="Health check (both stores)",
)
async def health_check():
    """
    관계형 DB(SELECT 1)와 사용자 DB(ping)를 확인합니다.
    하나라도 실패하면 503.
    """
    start_time = time.perf_counter()
    checks = {
        "database": await _run_check("Database", check_sql),
        "credential_store": await _run_check("Credential store", check_mongo),
    }
    healthy = ready._value.get() != 0 and all(c["status"] == "up" for c in checks.values())
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": checks,
        "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
    }
    health_check_status.labels(check_type="stores").set(1 if healthy else 0)
    if not healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
