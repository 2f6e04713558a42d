# tokenforge/services/tokens/assembler.py
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from tokenforge.services._shared.errors import ValidationError
from tokenforge.services._shared.ports.clock import Clock
from tokenforge.services._shared.ports.id_generator import TokenIdGenerator
from tokenforge.services.tokens import codec
from tokenforge.services.tokens.dto import EncodedParts, Header, TokenConfig
from tokenforge.services.tokens.signer import KeySigner


def to_json(obj: Mapping[str, Any]) -> str:
    """Compact JSON used for both header and claims segments."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


class TokenAssembler:
    """
    Builds the claim set and the encoded header/claims pair of a new token.

    Key rotation is checked here, on every issuance, rather than on a
    background timer: an idle service rotates on its next issuance.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        id_generator: TokenIdGenerator,
        signer: KeySigner,
        config: TokenConfig | None = None,
    ) -> None:
        self.clock = clock
        self.ids = id_generator
        self.signer = signer
        self.cfg = config or TokenConfig()

    def build_claims(self, user_claims: Mapping[str, Any], ttl_seconds: int) -> dict[str, Any]:
        """
        Merge ``user_claims`` with generated ``iat``, ``exp`` and ``jti``.

        Reserved keys supplied by the caller are overwritten.

        :raises ValidationError: If ``user_claims`` is not a mapping with
            string keys or ``ttl_seconds`` is not a positive integer.
        """
        if not isinstance(user_claims, Mapping):
            raise ValidationError("claims must be a mapping")
        if not all(isinstance(key, str) for key in user_claims):
            raise ValidationError("claim names must be strings")
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds <= 0:
            raise ValidationError("ttl_seconds must be a positive integer")

        iat = self.clock.now()
        claims = dict(user_claims)
        claims["iat"] = iat
        claims["exp"] = iat + ttl_seconds
        claims["jti"] = self.ids.next()
        return claims

    def build_encoded_parts(self, claims: Mapping[str, Any]) -> EncodedParts:
        """
        Rotate the key if due, then encode header and claims.

        :raises ValidationError: If a claim value is not JSON-serializable
            (including ``NaN`` and infinities).
        """
        self.signer.rotate_if_due()
        key = self.signer.active_key()
        header = Header(alg=self.cfg.algorithm, typ=self.cfg.token_type, kid=key.identifier)
        try:
            encoded_claims = codec.encode(to_json(claims))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"claims are not JSON-serializable: {exc}") from exc
        return EncodedParts(
            header=codec.encode(to_json(header.as_dict())),
            claims=encoded_claims,
            key=key,
        )
