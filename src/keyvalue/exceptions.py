"""Custom exceptions for the keyvalue package."""

from __future__ import annotations

from typing import Any


class KeyValueError(Exception):
    """Base exception for all key-value client errors."""


class TransportError(KeyValueError):
    """Raised when a request fails without yielding a usable HTTP response.

    Connection, TLS, timeout, read/write, decoding and redirect failures all
    land here.  The underlying ``httpx`` exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Transport error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class RemoteError(KeyValueError):
    """Raised when the service answers with anything other than ``200``."""

    def __init__(self, status_code: int, reason: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.url = url
        status = f"{status_code} {reason}".strip()
        super().__init__(f"Request error: {status}")


class ProtocolError(KeyValueError):
    """Raised when the creation endpoint returns an unexpected shape."""

    def __init__(self, message: str, response: str = "") -> None:
        self.response = response
        msg = message
        if response:
            msg += f": {response!r}"
        super().__init__(msg)


class SerializationError(KeyValueError):
    """Raised when an object cannot be converted to JSON text.

    Always raised before any request is sent.
    """

    def __init__(self, obj_type: str, detail: str = "") -> None:
        self.obj_type = obj_type
        msg = f"Cannot serialize object of type '{obj_type}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class ValidationError(KeyValueError):
    """Raised when a read-back disagrees with what was just written.

    The write has already taken effect remotely; nothing is rolled back.
    """

    def __init__(self, message: str, expected: Any = None, returned: str | None = None) -> None:
        self.expected = expected
        self.returned = returned
        super().__init__(message)
