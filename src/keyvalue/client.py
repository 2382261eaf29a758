"""KeyValue — a handle on one remote slot, addressed by ``(token, key)``."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from keyvalue import paths
from keyvalue.config import ClientConfig
from keyvalue.exceptions import ValidationError
from keyvalue.serialization import dumps
from keyvalue.transport import Transport

logger = logging.getLogger(__name__)

# Receives the raw text read back and the object that was written.
EqualsFn = Callable[[str, Any], bool]


class BaseKeyValue:
    """State shared by the sync and async handles.

    ``token`` and ``key`` never change once the handle exists.  ``value`` is
    the last value this handle wrote or read; the service stays the source
    of truth.
    """

    def __init__(self, token: str, key: str) -> None:
        self._token = token
        self._key = key
        self.value: str | None = None

    @property
    def token(self) -> str:
        return self._token

    @property
    def key(self) -> str:
        return self._key

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot: ``token``, ``key``, ``value``."""
        return {"token": self._token, "key": self._key, "value": self.value}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(token='{self._token[:4]}***', key={self._key!r})"

    # ── validation helpers ───────────────────────────────────

    def _check_round_trip(self, written: str, returned: str) -> None:
        if returned != written:
            logger.warning("Round-trip mismatch for key %r", self._key)
            raise ValidationError(
                f"round-trip mismatch: read {returned!r}, wrote {written!r}",
                expected=written,
                returned=returned,
            )

    def _check_predicate(self, ok: bool, obj: Any, returned: str) -> None:
        if not ok:
            logger.warning("Object validation failed for key %r", self._key)
            raise ValidationError(
                f"validation failed: {returned!r} differs from {obj!r}",
                expected=obj,
                returned=returned,
            )


class KeyValue(BaseKeyValue):
    """Blocking client for one slot.

    Obtain one with :meth:`create` (asks the service for a new slot) or
    :meth:`from_credentials` (reuses a known token and key, no network).
    Every call is a single attempt; errors propagate unchanged.

    Example:
        >>> with KeyValue.create("my-key") as kv:
        ...     kv.set("hello")
        ...     kv.get()
        'hello'
    """

    def __init__(
        self,
        token: str,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        super().__init__(token, key)
        self._owns_transport = transport is None
        self._transport = transport or Transport(config)

    # ── construction ─────────────────────────────────────────

    @classmethod
    def create(
        cls,
        key: str,
        *,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ) -> KeyValue:
        """Ask the service to allocate a slot for *key* and bind to it.

        Raises:
            ProtocolError: The reply is malformed or names a different key.
            RemoteError: Non-200 status.
            TransportError: The request failed before a response arrived.
        """
        owns_transport = transport is None
        transport = transport or Transport(config)
        try:
            body = transport.post(paths.new_path(key))
            token, key = paths.parse_creation_response(body, key)
        except Exception:
            if owns_transport:
                transport.close()
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
        transport: Transport | None = None,
    ) -> KeyValue:
        """Bind to an existing slot.  Performs no I/O and never fails."""
        return cls(token, key, config=config, transport=transport)

    # ── operations ───────────────────────────────────────────

    def set(self, value: str) -> None:
        """Store *value* in the slot."""
        self._transport.post(paths.value_path(self._token, self._key, value))
        self.value = value

    def set_and_validate(self, value: str) -> None:
        """Store *value*, read it back and require an exact match.

        Not atomic: a concurrent writer between the two requests makes this
        fail even though our write succeeded.
        """
        self.set(value)
        self._check_round_trip(value, self.get())

    def set_object(self, obj: Any) -> None:
        """Store *obj* as compact JSON.  Serialization happens before any I/O."""
        self.set(dumps(obj))

    def set_object_and_validate(self, obj: Any, equals: EqualsFn) -> None:
        """Store *obj* as JSON, read it back and let *equals* judge the result.

        *equals* receives ``(returned_text, obj)``; how to decode and compare
        is up to the caller.
        """
        self.set(dumps(obj))
        returned = self.get()
        self._check_predicate(equals(returned, obj), obj, returned)

    def get(self) -> str:
        """Return the stored value (one trailing newline stripped)."""
        value = self._transport.get(paths.slot_path(self._token, self._key))
        self.value = value
        return value

    # ── lifecycle ────────────────────────────────────────────

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> KeyValue:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
