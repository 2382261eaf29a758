"""Shared test fixtures.

``FakeService`` speaks the service's wire protocol in-process so the
clients can be exercised end to end through ``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import unquote_plus

import httpx
import pytest

from keyvalue import ClientConfig
from keyvalue.transport import AsyncTransport, Transport

BASE_URL = "https://kv.test"


class FakeService:
    """In-memory slot table behind the three endpoints."""

    def __init__(self) -> None:
        self.slots: dict[tuple[str, str], str] = {}
        self.requests: list[httpx.Request] = []
        self.creation_body: str | None = None
        self.on_read: Callable[[str], str] | None = None
        self._next_token = 1000

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        segments = request.url.raw_path.decode("ascii").lstrip("/").split("/")

        if request.method == "POST" and len(segments) == 2 and segments[0] == "new":
            return self._create(segments[1])
        if request.method == "POST" and len(segments) == 3:
            return self._write(*segments)
        if request.method == "GET" and len(segments) == 2:
            return self._read(*segments)
        return httpx.Response(400, text="bad request\n")

    def _create(self, escaped_key: str) -> httpx.Response:
        if self.creation_body is not None:
            return httpx.Response(200, text=self.creation_body)
        token = str(self._next_token)
        self._next_token += 1
        key = unquote_plus(escaped_key)
        self.slots[(token, key)] = ""
        return httpx.Response(200, text=f"{BASE_URL}/{token}/{key}\n")

    def _write(self, token: str, escaped_key: str, escaped_value: str) -> httpx.Response:
        slot = (token, unquote_plus(escaped_key))
        if slot not in self.slots:
            return httpx.Response(404, text="not found\n")
        self.slots[slot] = unquote_plus(escaped_value)
        return httpx.Response(200)

    def _read(self, token: str, escaped_key: str) -> httpx.Response:
        slot = (token, unquote_plus(escaped_key))
        if slot not in self.slots:
            return httpx.Response(404, text="not found\n")
        value = self.slots[slot]
        if self.on_read is not None:
            value = self.on_read(value)
        return httpx.Response(200, text=value + "\n")

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.raw_path.decode('ascii')}" for r in self.requests]


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def config():
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture
def transport(service, config):
    client = httpx.Client(transport=httpx.MockTransport(service.handle))
    yield Transport(config, client=client)
    client.close()


@pytest.fixture
async def async_transport(service, config):
    client = httpx.AsyncClient(transport=httpx.MockTransport(service.handle))
    yield AsyncTransport(config, client=client)
    await client.aclose()


@pytest.fixture
def failing_transport(config):
    """Factory for transports whose every request raises before a response exists."""

    def factory(exc: Exception) -> Transport:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        return Transport(config, client=httpx.Client(transport=httpx.MockTransport(handler)))

    return factory
