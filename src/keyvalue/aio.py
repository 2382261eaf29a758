"""AsyncKeyValue — the :class:`~keyvalue.client.KeyValue` contract for asyncio callers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from keyvalue import paths
from keyvalue.client import BaseKeyValue
from keyvalue.config import ClientConfig
from keyvalue.serialization import dumps
from keyvalue.transport import AsyncTransport

logger = logging.getLogger(__name__)

# May be sync or async; receives ``(returned_text, obj)``.
AsyncEqualsFn = Callable[[str, Any], bool | Awaitable[bool]]


class AsyncKeyValue(BaseKeyValue):
    """Non-blocking client for one slot.

    Same operations and errors as :class:`~keyvalue.client.KeyValue`; each
    method awaits at most two sequential requests.
    """

    def __init__(
        self,
        token: str,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: AsyncTransport | None = None,
    ) -> None:
        super().__init__(token, key)
        self._owns_transport = transport is None
        self._transport = transport or AsyncTransport(config)

    @classmethod
    async def create(
        cls,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: AsyncTransport | None = None,
    ) -> AsyncKeyValue:
        owns_transport = transport is None
        transport = transport or AsyncTransport(config)
        try:
            body = await transport.post(paths.new_path(key))
            token, key = paths.parse_creation_response(body, key)
        except Exception:
            if owns_transport:
                await transport.close()
            raise
        logger.info("Created slot for key %r", key)
        kv = cls(token, key, transport=transport)
        kv._owns_transport = owns_transport
        return kv

    @classmethod
    def from_credentials(
        cls,
        token: str,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: AsyncTransport | None = None,
    ) -> AsyncKeyValue:
        return cls(token, key, config=config, transport=transport)

    # ── operations ───────────────────────────────────────────

    async def set(self, value: str) -> None:
        await self._transport.post(paths.value_path(self._token, self._key, value))
        self.value = value

    async def set_and_validate(self, value: str) -> None:
        await self.set(value)
        self._check_round_trip(value, await self.get())

    async def set_object(self, obj: Any) -> None:
        await self.set(dumps(obj))

    async def set_object_and_validate(self, obj: Any, equals: AsyncEqualsFn) -> None:
        await self.set(dumps(obj))
        returned = await self.get()
        ok = equals(returned, obj)
        if asyncio.iscoroutine(ok):
            ok = await ok
        self._check_predicate(bool(ok), obj, returned)

    async def get(self) -> str:
        value = await self._transport.get(paths.slot_path(self._token, self._key))
        self.value = value
        return value

    # ── lifecycle ────────────────────────────────────────────

    async def close(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> AsyncKeyValue:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
