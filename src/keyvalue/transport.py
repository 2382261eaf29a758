"""HTTP transports — one request per call, errors mapped to our taxonomy."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from keyvalue.config import ClientConfig
from keyvalue.exceptions import RemoteError, TransportError
from keyvalue.paths import redact

logger = logging.getLogger(__name__)


def read_body(response: httpx.Response, path: str) -> str:
    """Return the body of a ``200`` response minus one trailing newline.

    Raises:
        RemoteError: for any other status.
    """
    logger.debug("%s %s -> %d", response.request.method, redact(path), response.status_code)
    if response.status_code != 200:
        raise RemoteError(response.status_code, response.reason_phrase, redact(path))
    # Only "\n" is trimmed; a "\r\n" ending leaves the "\r" in place.
    return response.text.removesuffix("\n")


class Transport:
    """Blocking transport backed by :class:`httpx.Client`.

    Parameters:
        config: Base URL and timeouts.  Defaults to :class:`ClientConfig`.
        client: Pre-built ``httpx.Client``.  The transport never closes a
                client it was handed; its own client is created on first use
                and closed by :meth:`close`.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout(),
                limits=self._config.limits(),
            )
        return self._client

    def request(self, method: str, path: str) -> str:
        url = self._config.base_url + path
        try:
            response = self._get_client().request(method, url)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {redact(path)}", str(e) or type(e).__name__) from e
        return read_body(response, path)

    def post(self, path: str) -> str:
        return self.request("POST", path)

    def get(self, path: str) -> str:
        return self.request("GET", path)

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


class AsyncTransport:
    """Asyncio twin of :class:`Transport` backed by :class:`httpx.AsyncClient`."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout(),
                limits=self._config.limits(),
            )
        return self._client

    async def request(self, method: str, path: str) -> str:
        url = self._config.base_url + path
        try:
            response = await self._get_client().request(method, url)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {redact(path)}", str(e) or type(e).__name__) from e
        return read_body(response, path)

    async def post(self, path: str) -> str:
        return await self.request("POST", path)

    async def get(self, path: str) -> str:
        return await self.request("GET", path)

    async def close(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AsyncTransport:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
