"""
unkey_gateway.api.app

FastAPI app factory for the Unkey gateway.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the shared httpx client and `UnkeyClient`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from unkey_gateway import __version__
from unkey_gateway.api.routers.health import router as health_router
from unkey_gateway.api.routers.keys import router as keys_router
from unkey_gateway.observability.logging import configure_logging, get_logger
from unkey_gateway.observability.middleware import RequestContextMiddleware
from unkey_gateway.settings import Settings
from unkey_gateway.unkey import UnkeyClient

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # One pooled httpx client and one UnkeyClient per process; telemetry is
        # probed here, once.
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
            app.state.unkey = UnkeyClient.from_settings(settings, http=http)
            log.info(
                "startup",
                env=settings.env,
                api_url=settings.api_url,
                retry_attempts=settings.retry_attempts,
                telemetry=not settings.disable_telemetry,
            )
            yield
        log.info("shutdown")

    app = FastAPI(
        title="Unkey Gateway",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(keys_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests swap the client via `app.dependency_overrides[unkey_client]` and never
# need the lifespan.
