# tokenforge/services/tokens/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from tokenforge.services._shared.errors import ValidationError

if TYPE_CHECKING:
    from tokenforge.services.tokens.signer import SigningKey

# Longest signature an HMAC-SHA256 digest can yield in unpadded URL-safe base64.
MAX_SIGNATURE_LENGTH = 43

# Claims generated at issuance; callers cannot set them.
RESERVED_CLAIMS = ("iat", "exp", "jti")


# ------------------------ Config DTO --------------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Token emission and key lifecycle configuration.

    :param rotation_interval_seconds: Maximum age of the active key before the
        next issuance rotates it.
    :type rotation_interval_seconds: int
    :param signature_length: Length of the signature segment in characters.
    :type signature_length: int
    :param algorithm: Value written to the header ``alg`` field.
    :type algorithm: str
    :param token_type: Value written to the header ``typ`` field.
    :type token_type: str
    :param default_ttl_seconds: Lifetime used when the caller gives none.
    :type default_ttl_seconds: int
    :param key_bytes: Size of freshly generated key material.
    :type key_bytes: int
    """

    rotation_interval_seconds: int = 86400
    signature_length: int = 16
    algorithm: str = "HS-SIM"
    token_type: str = "JWT"
    default_ttl_seconds: int = 3600
    key_bytes: int = 32

    def __post_init__(self) -> None:
        if self.rotation_interval_seconds <= 0:
            raise ValidationError("rotation_interval_seconds must be positive")
        if not 1 <= self.signature_length <= MAX_SIGNATURE_LENGTH:
            raise ValidationError(
                f"signature_length must be between 1 and {MAX_SIGNATURE_LENGTH}"
            )
        if self.default_ttl_seconds <= 0:
            raise ValidationError("default_ttl_seconds must be positive")
        if self.key_bytes < 16:
            raise ValidationError("key_bytes must be at least 16")

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> TokenConfig:
        """Build from a Flask-style config mapping (``TOKEN_*`` keys)."""
        defaults = cls.__dataclass_fields__

        def setting(key: str, field_name: str) -> int:
            raw = cfg.get(key, defaults[field_name].default)
            try:
                return int(raw)
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"{key} must be an integer, got {raw!r}") from exc

        return cls(
            rotation_interval_seconds=setting(
                "TOKEN_ROTATION_INTERVAL_SECONDS", "rotation_interval_seconds"
            ),
            signature_length=setting("TOKEN_SIGNATURE_LENGTH", "signature_length"),
            algorithm=str(cfg.get("TOKEN_ALGORITHM", defaults["algorithm"].default)),
            default_ttl_seconds=setting("TOKEN_DEFAULT_TTL_SECONDS", "default_ttl_seconds"),
            key_bytes=setting("TOKEN_KEY_BYTES", "key_bytes"),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


# ------------------------ Token structure ---------------------------------- #


@dataclass(frozen=True, slots=True)
class Header:
    """
    Token header. ``kid`` names the key that produced the signature.

    :param alg: Algorithm label.
    :param typ: Token type label.
    :param kid: Signing key identifier.
    """

    alg: str
    typ: str
    kid: str

    def as_dict(self) -> dict[str, str]:
        return {"alg": self.alg, "typ": self.typ, "kid": self.kid}


@dataclass(frozen=True, slots=True)
class EncodedParts:
    """
    Encoded header and claims ready to be signed.

    :param header: Encoded header segment.
    :param claims: Encoded claims segment.
    :param key: Key snapshot whose identifier the header names.
    """

    header: str
    claims: str
    key: SigningKey

    @property
    def kid(self) -> str:
        return self.key.identifier

    @property
    def signing_input(self) -> str:
        return f"{self.header}.{self.claims}"


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """
    Structured view of a token's first two segments.

    :param header: Parsed header JSON object.
    :param claims: Parsed claims JSON object.
    :param encoded_header: Header segment exactly as received.
    :param encoded_claims: Claims segment exactly as received.
    :param signature: Third segment, passed through unparsed.
    """

    header: dict[str, Any]
    claims: dict[str, Any]
    encoded_header: str
    encoded_claims: str
    signature: str

    @property
    def signing_input(self) -> str:
        return f"{self.encoded_header}.{self.encoded_claims}"


# --------------------------- Output DTOs ----------------------------------- #


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """
    Outcome of :meth:`TokenService.verify`.

    :param valid: Whether every check passed.
    :param payload: Claims, present only when ``valid``.
    :param error: Reason, present only when not ``valid``.
    """

    valid: bool
    payload: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def ok(cls, claims: dict[str, Any]) -> VerificationResult:
        return cls(valid=True, payload=claims)

    @classmethod
    def fail(cls, error: str) -> VerificationResult:
        return cls(valid=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"valid": self.valid}
        if self.payload is not None:
            out["payload"] = self.payload
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass(frozen=True, slots=True)
class RefreshOut:
    """
    Output DTO of a refresh.

    :param token: Newly issued token.
    :param old_token_expiry: ``exp`` of the token that was refreshed.
    """

    token: str
    old_token_expiry: int

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "oldTokenExpiry": self.old_token_expiry}
