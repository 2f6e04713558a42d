"""Token lifecycle components and the :class:`TokenService` orchestrator."""

from __future__ import annotations

from .assembler import TokenAssembler
from .dto import (
    DecodedToken,
    EncodedParts,
    Header,
    RefreshOut,
    TokenConfig,
    VerificationResult,
)
from .parser import TokenParser
from .service import TokenService
from .signer import KeySigner, SigningKey
from .verifier import (
    INVALID_SIGNATURE,
    TOKEN_EXPIRED,
    TOKEN_REVOKED,
    VERIFICATION_FAILED,
    TokenVerifier,
)

__all__ = [
    "TokenService",
    "TokenAssembler",
    "TokenParser",
    "TokenVerifier",
    "KeySigner",
    "SigningKey",
    "TokenConfig",
    "Header",
    "EncodedParts",
    "DecodedToken",
    "VerificationResult",
    "RefreshOut",
    "TOKEN_EXPIRED",
    "TOKEN_REVOKED",
    "INVALID_SIGNATURE",
    "VERIFICATION_FAILED",
]
