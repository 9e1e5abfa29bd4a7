"""
unkey_gateway.api.routers.keys

Public key endpoints proxied to Unkey.

Responsibilities:
- `POST /create`: create a key for an API.
- `GET /key`: look up a key by id.
- `GET /protected`: a route guarded by verifying the caller's `x-api-key`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.status import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from unkey_gateway.api.deps import lenient_body, unkey_client
from unkey_gateway.observability.logging import get_logger
from unkey_gateway.unkey import Err, UnkeyClient

log = get_logger(__name__)

router = APIRouter(tags=["keys"])

NO_AUTH_HEADER = "No authorization header found"


class CreateKeyRequest(BaseModel):
    apiId: str | None = None
    name: str | None = None


class GetKeyRequest(BaseModel):
    keyId: str | None = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/create")
async def create_key(
    body: CreateKeyRequest = Depends(lenient_body(CreateKeyRequest)),
    unkey: UnkeyClient = Depends(unkey_client),
) -> JSONResponse:
    if not body.apiId or not body.name:
        return _error(HTTP_400_BAD_REQUEST, "apiId and name are required")

    try:
        result = await unkey.create_key(body.model_dump())
    except Exception as e:
        log.exception("create_key_failed", api_id=body.apiId)
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    if isinstance(result, Err):
        log.warning("create_key_failed", api_id=body.apiId, error=result.message)
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, result.message)
    return JSONResponse(result.to_dict(), status_code=HTTP_200_OK)


@router.get("/key")
async def get_key(
    body: GetKeyRequest = Depends(lenient_body(GetKeyRequest)),
    unkey: UnkeyClient = Depends(unkey_client),
) -> JSONResponse:
    if not body.keyId:
        # Message kept as-is for existing clients, even though keyId is what's missing.
        return _error(HTTP_400_BAD_REQUEST, NO_AUTH_HEADER)

    try:
        result = await unkey.get_key(body.model_dump())
    except Exception as e:
        log.exception("get_key_failed", key_id=body.keyId)
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))
    if isinstance(result, Err):
        log.warning("get_key_failed", key_id=body.keyId, error=result.message)
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, result.message)
    return JSONResponse(result.to_dict(), status_code=HTTP_200_OK)


@router.get("/protected")
async def protected(
    x_api_key: str | None = Header(default=None),
    unkey: UnkeyClient = Depends(unkey_client),
) -> JSONResponse:
    if not x_api_key:
        return _error(HTTP_400_BAD_REQUEST, NO_AUTH_HEADER)

    try:
        result = await unkey.verify_key({"key": x_api_key})
        verification = result.unwrap()
        valid = bool(verification.get("valid"))
    except Exception as e:
        log.exception("verify_key_failed")
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    if not valid:
        return JSONResponse({"message": "You can not access"}, status_code=HTTP_401_UNAUTHORIZED)
    return JSONResponse({"message": "You can access"}, status_code=HTTP_200_OK)


# --- Module Notes -----------------------------------------------------------
# Upstream failures (`Err` results) are answered with 500 and the upstream message;
# `/protected` reaches them through `unwrap()` raising `UnkeyError`. The
# FETCH_ERROR code is not exposed to callers.
