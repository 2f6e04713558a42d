"""Unit tests for the URL-safe codec."""

from __future__ import annotations

import re

import pytest

from tokenforge.services._shared.errors import DecodeError, ValidationError
from tokenforge.services.tokens import codec

URL_SAFE = re.compile(r"[A-Za-z0-9_-]*")


def test_encode_known_vector() -> None:
    """Padding and ``=`` in the input never leak into the output."""

    assert codec.encode("Hello= World!") == "SGVsbG89IFdvcmxkIQ"
    assert codec.decode("SGVsbG89IFdvcmxkIQ") == "Hello= World!"


@pytest.mark.parametrize(
    "raw",
    ["a", "ab", "abc", "abcd", '{"alg":"HS-SIM","typ":"JWT"}', "?>?>~~~", "héllo ✓ 東京"],
)
def test_round_trip_and_alphabet(raw: str) -> None:
    encoded = codec.encode(raw)
    assert URL_SAFE.fullmatch(encoded)
    assert "=" not in encoded
    assert codec.decode(encoded) == raw


def test_encode_accepts_bytes() -> None:
    assert codec.encode(b"\xff\xfe") == codec.encode_bytes(b"\xff\xfe")
    assert codec.decode_bytes(codec.encode_bytes(b"\xff\xfe")) == b"\xff\xfe"


@pytest.mark.parametrize("bad", ["", "abc=", "a+b/", "with space", "a.b", "A"])
def test_decode_rejects_invalid_text(bad: str) -> None:
    with pytest.raises(DecodeError):
        codec.decode(bad)


def test_decode_rejects_non_string() -> None:
    with pytest.raises(DecodeError):
        codec.decode(123)  # type: ignore[arg-type]


def test_decode_rejects_non_utf8_bytes() -> None:
    # "_w" is the encoding of the single byte 0xFF.
    with pytest.raises(DecodeError):
        codec.decode("_w")


def test_decode_error_is_a_validation_error() -> None:
    assert issubclass(DecodeError, ValidationError)
