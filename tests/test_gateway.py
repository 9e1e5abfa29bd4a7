"""
tests.test_gateway

HTTP behaviour of the gateway routes with a fake Unkey API behind the client.
"""

from __future__ import annotations

import json

import httpx
import pytest

from unkey_gateway.api.app import create_app
from unkey_gateway.api.deps import unkey_client
from unkey_gateway.settings import Settings


@pytest.fixture
def gateway(make_client):
    def _gateway(**client_kwargs) -> httpx.AsyncClient:
        app = create_app(settings=Settings(env="test", api_key="k"))
        client = make_client(**client_kwargs)
        app.dependency_overrides[unkey_client] = lambda: client
        transport = httpx.ASGITransport(app=app)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    return _gateway


@pytest.mark.asyncio
async def test_create_key_forwards_api_id_and_name(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(200, json={"key": "sk_1", "keyId": "key_1"}))

    async with gateway() as client:
        r = await client.post("/create", json={"apiId": "api_1", "name": "svc", "extra": 1})

    assert r.status_code == 200
    assert r.json() == {"result": {"key": "sk_1", "keyId": "key_1"}}
    assert json.loads(fake_unkey.requests[0].content) == {"apiId": "api_1", "name": "svc"}


@pytest.mark.asyncio
async def test_create_key_missing_fields(gateway, fake_unkey) -> None:
    async with gateway() as client:
        r = await client.post("/create", json={"apiId": "api_1"})

    assert r.status_code == 400
    assert "error" in r.json()
    assert fake_unkey.requests == []


@pytest.mark.asyncio
async def test_create_key_upstream_failure_is_500(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(500, text="internal"))

    async with gateway(attempts=1) as client:
        r = await client.post("/create", json={"apiId": "api_1", "name": "svc"})

    assert r.status_code == 500
    assert r.json() == {"error": "internal"}
    assert len(fake_unkey.requests) == 2


@pytest.mark.asyncio
async def test_get_key_without_key_id(gateway, fake_unkey) -> None:
    async with gateway() as client:
        r = await client.request("GET", "/key", json={})

    assert r.status_code == 400
    assert r.json() == {"error": "No authorization header found"}
    assert fake_unkey.requests == []


@pytest.mark.asyncio
async def test_get_key_with_malformed_body(gateway) -> None:
    async with gateway() as client:
        r = await client.request("GET", "/key", content=b"{not json")

    assert r.status_code == 400
    assert r.json() == {"error": "No authorization header found"}


@pytest.mark.asyncio
async def test_get_key_success(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(200, json={"id": "key_123"}))

    async with gateway() as client:
        r = await client.request("GET", "/key", json={"keyId": "key_123"})

    assert r.status_code == 200
    assert r.json() == {"result": {"id": "key_123"}}
    upstream = fake_unkey.requests[0]
    assert upstream.method == "GET"
    assert upstream.url.path == "/v1/keys.getKey"
    assert upstream.url.params["keyId"] == "key_123"


@pytest.mark.asyncio
async def test_get_key_transport_failure(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.ConnectError("unreachable"))

    async with gateway() as client:
        r = await client.request("GET", "/key", json={"keyId": "key_123"})

    assert r.status_code == 500
    assert r.json() == {"error": "unreachable"}


@pytest.mark.asyncio
async def test_protected_without_header(gateway, fake_unkey) -> None:
    async with gateway() as client:
        r = await client.get("/protected")

    assert r.status_code == 400
    assert r.json() == {"error": "No authorization header found"}
    assert fake_unkey.requests == []


@pytest.mark.asyncio
async def test_protected_invalid_key(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(200, json={"valid": False, "code": "NOT_FOUND"}))

    async with gateway() as client:
        r = await client.get("/protected", headers={"x-api-key": "sk_bad"})

    assert r.status_code == 401
    assert r.json() == {"message": "You can not access"}
    upstream = fake_unkey.requests[0]
    assert upstream.url.path == "/v1/keys.verifyKey"
    assert json.loads(upstream.content) == {"key": "sk_bad"}


@pytest.mark.asyncio
async def test_protected_valid_key(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(200, json={"valid": True, "keyId": "key_1"}))

    async with gateway() as client:
        r = await client.get("/protected", headers={"x-api-key": "sk_good"})

    assert r.status_code == 200
    assert r.json() == {"message": "You can access"}


@pytest.mark.asyncio
async def test_protected_upstream_failure(gateway, fake_unkey) -> None:
    fake_unkey.reply(httpx.Response(503, text="down"))

    async with gateway(attempts=0) as client:
        r = await client.get("/protected", headers={"x-api-key": "sk_good"})

    assert r.status_code == 500
    assert r.json() == {"error": "down"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(gateway) -> None:
    async with gateway() as client:
        r = await client.get("/protected", headers={"x-request-id": "req-1"})

    assert r.headers["x-request-id"] == "req-1"


@pytest.mark.asyncio
async def test_get_key_with_non_object_body(gateway, fake_unkey) -> None:
    async with gateway() as client:
        r = await client.request("GET", "/key", json=["key_123"])

    assert r.status_code == 400
    assert r.json() == {"error": "No authorization header found"}
    assert fake_unkey.requests == []


@pytest.mark.asyncio
async def test_create_key_mistyped_field_is_treated_as_missing(gateway, fake_unkey) -> None:
    async with gateway() as client:
        r = await client.post("/create", json={"apiId": {"nested": 1}, "name": "svc"})

    assert r.status_code == 400
    assert fake_unkey.requests == []


@pytest.mark.asyncio
async def test_create_key_invalid_upstream_url_is_500(gateway, fake_unkey) -> None:
    async with gateway(base_url="https://unkey.test:notaport") as client:
        r = await client.post("/create", json={"apiId": "api_1", "name": "svc"})

    assert r.status_code == 500
    assert "error" in r.json()
    assert fake_unkey.requests == []
