# tokenforge/services/tokens/parser.py
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from tokenforge.services._shared.errors import DecodeError, FormatError
from tokenforge.services.tokens import codec
from tokenforge.services.tokens.dto import DecodedToken

DELIMITER = "."


class TokenParser:
    """Splits tokens into segments and decodes the header and claims."""

    def split(self, token: str) -> tuple[str, str, str]:
        """
        Split ``token`` on the delimiter.

        :raises FormatError: Unless exactly three non-empty segments result.
        """
        if not isinstance(token, str):
            raise FormatError("Token must be a string")
        parts = token.split(DELIMITER)
        if len(parts) != 3 or not all(parts):
            raise FormatError("Invalid token format")
        return parts[0], parts[1], parts[2]

    def decode_parts(self, segments: Sequence[str]) -> DecodedToken:
        """
        Decode header and claims; the signature is passed through untouched.

        :raises FormatError: If a segment cannot be decoded or is not a JSON object.
        """
        encoded_header, encoded_claims, signature = segments
        return DecodedToken(
            header=self._decode_object(encoded_header, "header"),
            claims=self._decode_object(encoded_claims, "claims"),
            encoded_header=encoded_header,
            encoded_claims=encoded_claims,
            signature=signature,
        )

    @staticmethod
    def _decode_object(segment: str, name: str) -> dict[str, Any]:
        try:
            value = json.loads(codec.decode(segment))
        except DecodeError as exc:
            raise FormatError(f"Token {name} is not valid URL-safe base64") from exc
        except json.JSONDecodeError as exc:
            raise FormatError(f"Token {name} is not valid JSON") from exc
        if not isinstance(value, dict):
            raise FormatError(f"Token {name} must be a JSON object")
        return value
