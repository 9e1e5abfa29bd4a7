"""
unkey_gateway.unkey.client

Retrying HTTP client for the Unkey API.

Responsibilities:
- Build outbound URLs (`<base>/v1/<resource>.<action>?query`) and headers.
- Attach the root key as a bearer token and optional telemetry headers.
- Retry non-2xx responses with a backoff delay; shape every outcome as `Ok`/`Err`.
- Offer one typed method per Unkey endpoint used by this service.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import httpx

from unkey_gateway.observability.logging import get_logger
from unkey_gateway.settings import Settings
from unkey_gateway.unkey.models import (
    FETCH_ERROR,
    Err,
    Ok,
    OutboundRequest,
    Result,
    RetryPolicy,
)
from unkey_gateway.unkey.telemetry import HostEnvironment, TelemetryInfo

log = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class UnkeyClient:
    """
    Configuration is fixed at construction, so one instance can serve
    concurrent requests.

    An exception while sending returns `Err` immediately; only non-2xx
    responses are retried.
    """

    def __init__(
        self,
        *,
        base_url: str,
        root_key: str,
        http: httpx.AsyncClient,
        retry: RetryPolicy | None = None,
        disable_telemetry: bool = False,
        sdk_versions: Sequence[str] = (),
        host: HostEnvironment | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._root_key = root_key
        self._http = http
        self._retry = retry or RetryPolicy()
        self._sleep = sleep
        self._telemetry: TelemetryInfo | None = None
        if not disable_telemetry:
            host = host or HostEnvironment.current()
            self._telemetry = host.telemetry(sdk_versions=sdk_versions)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        http: httpx.AsyncClient,
        host: HostEnvironment | None = None,
    ) -> UnkeyClient:
        return cls(
            base_url=settings.api_url,
            root_key=settings.api_key,
            http=http,
            retry=RetryPolicy(attempts=settings.retry_attempts),
            disable_telemetry=settings.disable_telemetry,
            sdk_versions=settings.telemetry_sdk_versions,
            host=host,
        )

    @property
    def telemetry(self) -> TelemetryInfo | None:
        return self._telemetry

    @property
    def retry(self) -> RetryPolicy:
        return self._retry

    def headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._root_key}",
        }
        if self._telemetry is not None:
            headers.update(self._telemetry.headers())
        return headers

    def url_for(self, req: OutboundRequest) -> str:
        url = self._base_url + "/" + "/".join(req.path)
        if req.query:
            url += "?" + str(httpx.QueryParams(req.query))
        return url

    async def execute(self, req: OutboundRequest) -> Result:
        path = "/".join(req.path)
        last_error: str | None = None

        for attempt in range(self._retry.attempts + 1):
            try:
                url = self.url_for(req)
                r = await self._http.request(
                    req.method, url, headers=self.headers(), json=req.body
                )
                if 200 <= r.status_code < 300:
                    return Ok(r.json())
            except Exception as e:
                # Anything raised before a status is known ends the call: bad URLs,
                # unserializable bodies, transport errors, non-JSON 2xx bodies.
                log.warning("unkey_request_failed", path=path, attempt=attempt, error=str(e))
                return Err(FETCH_ERROR, str(e) or "No response")

            last_error = r.text
            delay_ms = self._retry.backoff(attempt)
            log.warning(
                "unkey_request_retry",
                path=path,
                attempt=attempt,
                status=r.status_code,
                delay_ms=delay_ms,
            )
            await self._sleep(delay_ms / 1000)

        return Err(FETCH_ERROR, last_error or "No response")

    async def _post(self, path: str, body: Any) -> Result:
        return await self.execute(OutboundRequest(path=("v1", path), method="POST", body=body))

    async def _get(self, path: str, query: Mapping[str, Any] | None) -> Result:
        return await self.execute(OutboundRequest(path=("v1", path), method="GET", query=query))

    # Keys
    async def create_key(self, body: Mapping[str, Any]) -> Result:
        return await self._post("keys.createKey", body)

    async def update_key(self, body: Mapping[str, Any]) -> Result:
        return await self._post("keys.updateKey", body)

    async def verify_key(self, body: Mapping[str, Any]) -> Result:
        return await self._post("keys.verifyKey", body)

    async def delete_key(self, body: Mapping[str, Any]) -> Result:
        return await self._post("keys.deleteKey", body)

    async def update_remaining(self, body: Mapping[str, Any]) -> Result:
        return await self._post("keys.updateRemaining", body)

    async def get_key(self, query: Mapping[str, Any]) -> Result:
        return await self._get("keys.getKey", query)

    async def get_verifications(self, query: Mapping[str, Any]) -> Result:
        return await self._get("keys.getVerifications", query)

    # APIs
    async def create_api(self, body: Mapping[str, Any]) -> Result:
        return await self._post("apis.createApi", body)

    async def delete_api(self, body: Mapping[str, Any]) -> Result:
        return await self._post("apis.deleteApi", body)

    async def get_api(self, query: Mapping[str, Any]) -> Result:
        return await self._get("apis.getApi", query)

    async def list_keys(self, query: Mapping[str, Any]) -> Result:
        return await self._get("apis.listKeys", query)

    # Rate limits
    async def limit_rate(self, body: Mapping[str, Any]) -> Result:
        return await self._post("ratelimits.limit", body)

    # Identities
    async def create_identity(self, body: Mapping[str, Any]) -> Result:
        return await self._post("identities.createIdentity", body)

    async def get_identity(self, query: Mapping[str, Any]) -> Result:
        return await self._get("identities.getIdentity", query)

    async def list_identities(self, query: Mapping[str, Any]) -> Result:
        return await self._get("identities.listIdentities", query)

    async def delete_identity(self, body: Mapping[str, Any]) -> Result:
        return await self._post("identities.deleteIdentity", body)

    async def update_identity(self, body: Mapping[str, Any]) -> Result:
        return await self._post("identities.updateIdentity", body)

    # Migrations
    async def create_keys_migration(self, body: Mapping[str, Any]) -> Result:
        return await self._post("migrations.createKeys", body)

    async def enqueue_keys_migration(self, body: Mapping[str, Any]) -> Result:
        return await self._post("migrations.enqueueKeys", body)


# --- Module Notes -----------------------------------------------------------
# Backoff sleeps go through the injected `sleep` so tests can record delays
# instead of waiting on them.
