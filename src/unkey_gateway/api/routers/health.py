"""
unkey_gateway.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that checks a root key is configured.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from unkey_gateway.api.deps import settings_dep
from unkey_gateway.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(settings: Settings = Depends(settings_dep)) -> JSONResponse:
    # Without a root key every upstream call would be rejected.
    if not settings.api_key:
        return JSONResponse({"status": "not_configured"}, status_code=HTTP_503_SERVICE_UNAVAILABLE)
    return JSONResponse({"status": "ready"}, status_code=HTTP_200_OK)


# --- Module Notes -----------------------------------------------------------
# Readiness does not call Unkey itself: a remote outage should not restart pods.
