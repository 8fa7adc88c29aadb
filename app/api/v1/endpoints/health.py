"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; readiness checks the search backend and content store.
"""

import logging
from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.config import get_settings
from app.db.session import DbSession
from app.search.elasticsearch_client import get_elasticsearch

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(
    session: DbSession,
    es: Annotated[AsyncElasticsearch, Depends(get_elasticsearch)],
):
    """Readiness: search backend answers ping and the content store answers SELECT 1."""
    checks = {"elasticsearch": await es.ping()}
    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:
        logger.warning("Readiness: database check failed: %s", e)
        checks["database"] = False

    if all(checks.values()):
        return {"status": "ready", "checks": checks}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unavailable", "checks": checks},
    )
