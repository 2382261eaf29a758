"""keyvalue — a small client for a hosted HTTP key-value service.

Ask for a slot (or reuse a known token and key), then ``set`` and ``get``
strings or JSON-serialized objects, optionally reading every write back to
confirm it stuck.
"""

import logging

from keyvalue.aio import AsyncKeyValue
from keyvalue.client import KeyValue
from keyvalue.config import ClientConfig
from keyvalue.exceptions import (
    KeyValueError,
    ProtocolError,
    RemoteError,
    SerializationError,
    TransportError,
    ValidationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AsyncKeyValue",
    "ClientConfig",
    "KeyValue",
    "KeyValueError",
    "ProtocolError",
    "RemoteError",
    "SerializationError",
    "TransportError",
    "ValidationError",
]
