############################################################
#
# blogcms - Blog and Content Management Service
#
# health.py: Health check and metrics endpoints
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Health check and metrics endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogcms.app.db import crud
from blogcms.app.db.models import Page, Post
from blogcms.app.db.session import get_async_db
from blogcms.app.logging_config import get_logger
from blogcms.app.metrics import CONTENT_ITEMS
from blogcms.app.settings import get_settings

logger = get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz")
async def liveness_probe() -> Dict[str, str]:
    """
    Liveness probe - checks if the application is running.

    Returns 200 if the application is alive.
    """
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/readyz")
async def readiness_probe(
    response: Response,
    db: AsyncSession = Depends(get_async_db),
) -> Dict[str, Any]:
    """
    Readiness probe - checks if the application can serve traffic.

    Checks:
    - Database connectivity
    """
    checks = {"database": False}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as exc:
        logger.warning("readiness_database_failed", error=str(exc))

    all_ready = all(checks.values())
    if not all_ready:
        response.status_code = 503

    return {
        "status": "ready" if all_ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/metrics")
async def prometheus_metrics(db: AsyncSession = Depends(get_async_db)) -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format.
    """
    settings = get_settings()
    if not settings.metrics_enabled:
        return Response(status_code=404)

    CONTENT_ITEMS.labels(kind="post").set(await crud.count_content(db, Post))
    CONTENT_ITEMS.labels(kind="page").set(await crud.count_content(db, Page))

    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
