"""
tests.conftest

Shared fixtures: a fake Unkey API built on `httpx.MockTransport` and a
recorder standing in for `asyncio.sleep`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio

from unkey_gateway.unkey import HostEnvironment, RetryPolicy, UnkeyClient

BASE_URL = "https://unkey.test"
ROOT_KEY = "unkey_root_test"


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeUnkey:
    """
    Serves queued responses (or raises queued exceptions) and records every
    request it receives. The last queued item repeats once the queue drains.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[httpx.Response | Exception] = []

    def reply(self, *replies: httpx.Response | Exception) -> FakeUnkey:
        self._replies.extend(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_unkey() -> FakeUnkey:
    return FakeUnkey()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest_asyncio.fixture
async def make_client(
    fake_unkey: FakeUnkey, sleeps: SleepRecorder
) -> AsyncIterator[Callable[..., UnkeyClient]]:
    opened: list[httpx.AsyncClient] = []

    def _make(
        *,
        attempts: int = 5,
        retry: RetryPolicy | None = None,
        base_url: str = BASE_URL,
        disable_telemetry: bool = True,
        environ: dict[str, str] | None = None,
        **kwargs,
    ) -> UnkeyClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(fake_unkey.handler))
        opened.append(http)
        return UnkeyClient(
            base_url=base_url,
            root_key=ROOT_KEY,
            http=http,
            retry=retry or RetryPolicy(attempts=attempts),
            disable_telemetry=disable_telemetry,
            host=HostEnvironment(environ=environ or {}, python_version="3.12.1"),
            sleep=sleeps,
            **kwargs,
        )

    yield _make

    for http in opened:
        await http.aclose()
