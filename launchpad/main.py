from contextlib import asynccontextmanager

import httpx
import redis.asyncio as aioredis
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import REGISTRY, CONTENT_TYPE_LATEST, generate_latest

from launchpad.api import router, setup_error_handlers
from launchpad.api.middleware import PrometheusMiddleware, RequestIDMiddleware
from launchpad.api.routes import health as health_routes
from launchpad.clients.launch_api import LaunchAPI
from launchpad.core import setup_logging
from launchpad.core.config import settings
from launchpad.core.logging import LogContext
from launchpad.services.cache_service import CacheService

logger = LogContext(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    http_client = httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
    app.state.launch_api = LaunchAPI(http_client, settings.LAUNCH_API_BASE_URL)

    redis_client = None
    app.state.cache_service = None
    if settings.LAUNCH_CACHE_ENABLED:
        redis_client = aioredis.from_url(settings.REDIS_URL)
        app.state.cache_service = CacheService(redis_client)

    logger.info(
        "Launchpad API started",
        extra={
            "upstream": settings.LAUNCH_API_BASE_URL,
            "launch_cache_enabled": settings.LAUNCH_CACHE_ENABLED,
        },
    )

    yield

    # Clean up resources
    await http_client.aclose()
    if redis_client is not None:
        await redis_client.aclose()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        description="Paginated access to SpaceX launches",
        version=settings.VERSION,
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    # Set up error handlers
    setup_error_handlers(app)

    # Include routers
    app.include_router(router, prefix=settings.API_V1_STR)
    app.include_router(
        health_routes.router, prefix=f"{settings.API_V1_STR}/health", tags=["health"]
    )

    # Add middleware - the last one added runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return Response(
            content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST
        )

    return app


app = create_app()
