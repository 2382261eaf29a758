"""ClientConfig — connection settings shared by the sync and async clients."""

from __future__ import annotations

import os

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://api.keyvalue.xyz"
DEFAULT_TIMEOUT = 10.0


class ClientConfig(BaseModel):
    """Where the service lives and how patiently to talk to it.

    Attributes:
        base_url:         Service root, e.g. ``https://api.keyvalue.xyz``.
                          A trailing ``/`` is dropped.
        connect_timeout:  Seconds to establish the TCP/TLS connection.
        read_timeout:     Seconds to wait for response data.
        write_timeout:    Seconds to send the request.
        pool_timeout:     Seconds to wait for a free pooled connection.
        keepalive_expiry: Seconds an idle keep-alive connection is kept.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    read_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    write_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    pool_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    keepalive_expiry: float = Field(default=90.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("base_url must not be empty")
        return value

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from ``KEYVALUE_BASE_URL`` / ``KEYVALUE_TIMEOUT``.

        Unset variables fall back to the defaults.  ``KEYVALUE_TIMEOUT`` is a
        single number of seconds applied to every timeout.
        """
        values: dict[str, object] = {}
        base_url = os.getenv("KEYVALUE_BASE_URL", "")
        if base_url:
            values["base_url"] = base_url
        timeout = os.getenv("KEYVALUE_TIMEOUT", "")
        if timeout:
            seconds = float(timeout)
            for name in ("connect_timeout", "read_timeout", "write_timeout", "pool_timeout"):
                values[name] = seconds
        return cls.model_validate(values)

    # ── httpx plumbing ───────────────────────────────────────

    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
            pool=self.pool_timeout,
        )

    def limits(self) -> httpx.Limits:
        return httpx.Limits(keepalive_expiry=self.keepalive_expiry)
