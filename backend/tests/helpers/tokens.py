"""Helpers for taking tokens apart and forging variants in tests."""

from __future__ import annotations

import json
from typing import Any

from tokenforge.services.tokens import codec


def segments(token: str) -> list[str]:
    """Split a token into its three segments."""

    return token.split(".")


def header_of(token: str) -> dict[str, Any]:
    """Decode the header segment of ``token``."""

    return json.loads(codec.decode(segments(token)[0]))


def with_claims(token: str, **changes: Any) -> str:
    """Return ``token`` with modified claims but the original header and signature.

    The result is well-formed yet carries a signature over different bytes.
    """

    header, claims_segment, signature = segments(token)
    claims = json.loads(codec.decode(claims_segment))
    claims.update(changes)
    return ".".join([header, codec.encode(json.dumps(claims)), signature])


def with_signature(token: str, signature: str) -> str:
    """Return ``token`` with its signature segment replaced."""

    header, claims_segment, _ = segments(token)
    return ".".join([header, claims_segment, signature])


def build_token(header: dict[str, Any], claims: dict[str, Any], signature: str = "sig") -> str:
    """Assemble an arbitrary (unsigned) token from raw JSON objects."""

    return ".".join(
        [codec.encode(json.dumps(header)), codec.encode(json.dumps(claims)), signature]
    )
