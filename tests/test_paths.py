"""Tests for request targets and creation-response parsing."""

import pytest

from keyvalue import ProtocolError
from keyvalue.paths import (
    escape,
    new_path,
    parse_creation_response,
    redact,
    slot_path,
    value_path,
)

# ── Escaping ─────────────────────────────────────────────────────


def test_escape_plain():
    assert escape("some-key_1.x~") == "some-key_1.x~"


def test_escape_space_and_slash():
    assert escape("a b/c") == "a+b%2Fc"


def test_escape_reserved_and_unicode():
    assert escape("a+b&c=d?") == "a%2Bb%26c%3Dd%3F"
    assert escape("é") == "%C3%A9"


def test_paths():
    assert new_path("my key") == "/new/my+key"
    assert slot_path("0123456", "my key") == "/0123456/my+key"
    assert value_path("0123456", "k", "hello world") == "/0123456/k/hello+world"


def test_value_path_empty_value():
    assert value_path("tok", "k", "") == "/tok/k/"


# ── Creation response ────────────────────────────────────────────


def test_parse_full_url():
    token, key = parse_creation_response("https://api.keyvalue.xyz/0123456/some-key", "some-key")
    assert token == "0123456"
    assert key == "some-key"


def test_parse_bare_token_and_key():
    assert parse_creation_response("abc123/k", "k") == ("abc123", "k")


def test_parse_escaped_key_echo_is_a_mismatch():
    with pytest.raises(ProtocolError, match="key mismatch"):
        parse_creation_response("https://h/tok/a+b", "a b")
    with pytest.raises(ProtocolError, match="key mismatch"):
        parse_creation_response("https://h/tok/a%20b", "a b")


def test_parse_no_slash():
    with pytest.raises(ProtocolError, match="malformed creation response"):
        parse_creation_response("garbage", "garbage")


def test_parse_empty_body():
    with pytest.raises(ProtocolError, match="malformed creation response"):
        parse_creation_response("", "k")


def test_parse_empty_token():
    with pytest.raises(ProtocolError, match="malformed creation response"):
        parse_creation_response("/k", "k")


def test_parse_key_mismatch():
    with pytest.raises(ProtocolError, match="key mismatch") as exc_info:
        parse_creation_response("https://h/tok/other", "mine")
    assert exc_info.value.response == "https://h/tok/other"


# ── Redaction ────────────────────────────────────────────────────


def test_redact_hides_token_and_value():
    assert redact("/0123456/k/secret") == "/0123***/k/<value>"


def test_redact_slot_path():
    assert redact("/0123456/k") == "/0123***/k"


def test_redact_leaves_creation_path():
    assert redact("/new/k") == "/new/k"
