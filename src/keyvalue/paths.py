"""Request targets and creation-response parsing.

Pure string handling, no I/O.  Wire format::

    POST /new/<key>                 -> ".../<token>/<key>"
    POST /<token>/<key>/<value>     -> 200, body ignored
    GET  /<token>/<key>             -> value text
"""

from __future__ import annotations

from urllib.parse import quote_plus

from keyvalue.exceptions import ProtocolError


def escape(text: str) -> str:
    """Query-style escaping: space becomes ``+``, ``/`` is percent-encoded."""
    return quote_plus(text, safe="")


def new_path(key: str) -> str:
    return f"/new/{escape(key)}"


def slot_path(token: str, key: str) -> str:
    return f"/{token}/{escape(key)}"


def value_path(token: str, key: str, value: str) -> str:
    return f"{slot_path(token, key)}/{escape(value)}"


def parse_creation_response(body: str, requested_key: str) -> tuple[str, str]:
    """Extract ``(token, key)`` from the creation endpoint's reply.

    The reply looks like ``https://api.keyvalue.xyz/0123456/some-key``; the
    last two ``/``-separated segments are the token and the key.

    Raises:
        ProtocolError: ``"malformed creation response"`` when there are fewer
            than two segments or the token segment is empty, ``"key mismatch"``
            when the returned key is not the one that was requested.
    """
    parts = body.split("/")
    if len(parts) < 2 or not parts[-2]:
        raise ProtocolError("malformed creation response", body)

    token, returned_key = parts[-2], parts[-1]
    if returned_key != requested_key:
        raise ProtocolError("key mismatch", body)

    return token, returned_key


def redact(path: str) -> str:
    """Return *path* safe for logs: token shortened, value dropped."""
    segments = path.split("/")
    if len(segments) < 3 or segments[1] == "new":
        return path
    segments[1] = segments[1][:4] + "***"
    if len(segments) > 3:
        segments[3:] = ["<value>"]
    return "/".join(segments)
