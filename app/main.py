"""
FastAPI application entry point.
Challenge: Mount routes, middleware (Prometheus), startup check of the search backend.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.api.v1.endpoints import health
from app.api.v1.router import api_router
from app.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.search.elasticsearch_client import close_elasticsearch, ensure_posts_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: make sure the posts index exists. Shutdown: close the ES client."""
    try:
        await ensure_posts_index()
    except Exception as e:
        # Keep serving; searches fail with 502 until the backend is reachable
        logger.error("Search backend unavailable at startup: %s", e)
    yield
    await close_elasticsearch()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Read-only full-text search over posts with field selection, taxonomy filters and paging links.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Read-only public API: any origin may call it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
