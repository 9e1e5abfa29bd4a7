"""
unkey_gateway.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the shared `UnkeyClient`.
- Decode JSON request bodies into pydantic models, leniently.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from unkey_gateway.settings import Settings, get_settings
from unkey_gateway.unkey import UnkeyClient


def settings_dep(request: Request) -> Settings:
    # `create_app` pins its settings on app.state; fall back to the env-driven ones.
    return getattr(request.app.state, "settings", None) or get_settings()


def unkey_client(request: Request) -> UnkeyClient:
    # The client is created on app startup in `unkey_gateway.api.app.create_app`.
    return request.app.state.unkey  # type: ignore[attr-defined]


M = TypeVar("M", bound=BaseModel)


def lenient_body(model: type[M]) -> Callable[[Request], Awaitable[M]]:
    """
    Dependency factory parsing the raw body into `model`.

    Missing, malformed or mistyped bodies yield `model()` (all fields unset) so
    routes answer with their own presence checks instead of FastAPI's 422.
    """

    async def _dep(request: Request) -> M:
        raw = await request.body()
        try:
            return model.model_validate_json(raw or b"{}")
        except ValidationError:
            return model()

    return _dep
