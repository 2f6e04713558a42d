"""URL-safe base64 codec without padding, the text form used by every token segment."""

from __future__ import annotations

import base64
import binascii
import re

from tokenforge.services._shared.errors import DecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]+")


def encode_bytes(raw: bytes) -> str:
    """Encode raw bytes into the unpadded URL-safe alphabet."""
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def encode(raw: str | bytes) -> str:
    """
    Encode ``raw`` into ``[A-Za-z0-9_-]*`` with no ``=`` padding.

    Text is encoded as UTF-8 first, so multi-byte characters round-trip.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return encode_bytes(raw)


def decode_bytes(text: str) -> bytes:
    """
    Inverse of :func:`encode_bytes`.

    :raises DecodeError: If ``text`` is not a non-empty string over the
        URL-safe alphabet, or has a length no encoder can produce.
    """
    if not isinstance(text, str) or not text:
        raise DecodeError("Encoded text must be a non-empty string")
    if not _ALPHABET.fullmatch(text):
        raise DecodeError("Encoded text contains characters outside [A-Za-z0-9_-]")
    if len(text) % 4 == 1:
        raise DecodeError("Encoded text has an impossible length")
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:  # pragma: no cover - guarded above
        raise DecodeError(str(exc)) from exc


def decode(text: str) -> str:
    """
    Inverse of :func:`encode` for any string it can produce.

    :raises DecodeError: On invalid input or bytes that are not UTF-8.
    """
    raw = decode_bytes(text)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("Decoded bytes are not valid UTF-8") from exc


__all__ = ["encode", "decode", "encode_bytes", "decode_bytes"]
