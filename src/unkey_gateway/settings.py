"""
unkey_gateway.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the gateway and the Unkey client.
- Hide the root key from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Every field maps to an `UNKEY_*` environment variable, e.g. `UNKEY_API_URL`.
    """

    model_config = SettingsConfigDict(env_prefix="UNKEY_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "unkey-gateway"
    log_level: str = "INFO"

    gateway_host: str = "0.0.0.0"
    gateway_port: int = 8000

    # Remote Unkey API
    api_url: str = "https://api.unkey.dev"
    api_key: str = Field(default="", repr=False)
    http_timeout_seconds: float = 10.0

    # Client behaviour
    retry_attempts: int = Field(default=5, ge=0)
    disable_telemetry: bool = False
    telemetry_sdk_versions: list[str] = Field(default_factory=list)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Retry backoff is code, not configuration: override it by building an
# `UnkeyClient` with a custom `RetryPolicy`.
