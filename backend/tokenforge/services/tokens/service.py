# tokenforge/services/tokens/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from tokenforge.services._shared.base import BaseService, ServiceContext
from tokenforge.services._shared.errors import FormatError, RefreshError
from tokenforge.services._shared.ports.clock import Clock, SystemClock
from tokenforge.services._shared.ports.id_generator import (
    TokenIdGenerator,
    UuidTokenIdGenerator,
)
from tokenforge.services._shared.ports.revocation_store import (
    InMemoryRevocationStore,
    RevocationStore,
)
from tokenforge.services.tokens.assembler import TokenAssembler
from tokenforge.services.tokens.dto import (
    RESERVED_CLAIMS,
    DecodedToken,
    RefreshOut,
    TokenConfig,
    VerificationResult,
)
from tokenforge.services.tokens.parser import DELIMITER, TokenParser
from tokenforge.services.tokens.signer import KeySigner
from tokenforge.services.tokens.verifier import (
    TOKEN_EXPIRED,
    VERIFICATION_FAILED,
    TokenVerifier,
)


class TokenService(BaseService):
    """
    Token lifecycle service (issue / verify / decode / revoke / rotate / refresh).

    Owns no mutable state itself. The signer, revocation store, clock and id
    generator are injected and shared with the assembler and verifier, so
    several independent services can live in one process.

    A token's state (valid, expired, revoked, invalid) is never stored; it is
    recomputed on every :meth:`verify` from the clock, the registry and the
    active key.
    """

    def __init__(
        self,
        *,
        signer: KeySigner | None = None,
        revocations: RevocationStore | None = None,
        clock: Clock | None = None,
        id_generator: TokenIdGenerator | None = None,
        config: TokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param signer: Key owner; built from ``config`` and ``clock`` when omitted.
        :param revocations: Registry of revoked ``jti`` values.
        :param clock: Time source in whole seconds.
        :param id_generator: Supplier of unique ``jti`` values.
        :param config: Key rotation and signature settings.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.cfg = config or (signer.cfg if signer else TokenConfig())
        self.clock = clock or (signer.clock if signer else SystemClock())
        self.signer = signer or KeySigner(clock=self.clock, config=self.cfg)
        self.revocations = revocations or InMemoryRevocationStore(clock=self.clock)
        self.ids = id_generator or UuidTokenIdGenerator()

        self.assembler = TokenAssembler(
            clock=self.clock, id_generator=self.ids, signer=self.signer, config=self.cfg
        )
        self.parser = TokenParser()
        self.verifier = TokenVerifier(
            clock=self.clock, revocations=self.revocations, signer=self.signer
        )

    def with_context(self, ctx: ServiceContext) -> TokenService:
        """Return a view of this service sharing all state but logging with ``ctx``."""
        return TokenService(
            signer=self.signer,
            revocations=self.revocations,
            clock=self.clock,
            id_generator=self.ids,
            config=self.cfg,
            ctx=ctx,
        )

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue(self, claims: Mapping[str, Any], ttl_seconds: int | None = None) -> str:
        """
        Issue a signed token carrying ``claims``.

        :param claims: Application claims; ``iat``/``exp``/``jti`` are overwritten.
        :param ttl_seconds: Lifetime; defaults to ``cfg.default_ttl_seconds``.
        :returns: ``<header>.<claims>.<signature>``.
        :raises ValidationError: On a bad ttl or non-serializable claims.
        """
        ttl = self.cfg.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        full_claims = self.assembler.build_claims(claims, ttl)
        parts = self.assembler.build_encoded_parts(full_claims)
        signature = self.signer.sign(parts.signing_input, key=parts.key)
        self._event(
            logging.INFO,
            "token.issued",
            jti=full_claims["jti"],
            kid=parts.kid,
            exp=full_claims["exp"],
        )
        return DELIMITER.join((parts.header, parts.claims, signature))

    # ------------------------------------------------------------------ #
    # Verify / decode
    # ------------------------------------------------------------------ #

    def verify(self, token: str) -> VerificationResult:
        """
        Verify ``token``. Never raises for untrustworthy or malformed input.

        Parse failures collapse into ``"Verification failed"``.
        """
        _, result = self._inspect(token)
        return result

    def decode(self, token: str) -> dict[str, Any]:
        """
        Return the claims without any trust check.

        :raises FormatError: If the token is malformed.
        """
        return self._parse(token).claims

    def _parse(self, token: str) -> DecodedToken:
        return self.parser.decode_parts(self.parser.split(token))

    def _inspect(
        self, token: str, *, check_expiry: bool = True
    ) -> tuple[DecodedToken | None, VerificationResult]:
        try:
            decoded = self._parse(token)
            result = self.verifier.evaluate(decoded, check_expiry=check_expiry)
        except FormatError as exc:
            self._event(logging.DEBUG, "token.verify_failed", reason=str(exc))
            return None, VerificationResult.fail(VERIFICATION_FAILED)
        if not result.valid:
            self._event(
                logging.DEBUG,
                "token.verify_failed",
                jti=decoded.claims.get("jti"),
                kid=decoded.header.get("kid"),
                reason=result.error,
            )
        return decoded, result

    # ------------------------------------------------------------------ #
    # Revocation / keys
    # ------------------------------------------------------------------ #

    def revoke(self, jti: str, reason: str = "") -> None:
        """
        Revoke the token identified by ``jti``. Idempotent.

        :raises ValidationError: If ``jti`` is empty.
        """
        self.revocations.revoke(jti, reason)

    def revocation_count(self) -> int:
        return self.revocations.count()

    def clear_revocations(self) -> None:
        """Forget every revocation. Previously revoked tokens become valid again."""
        self.revocations.clear()

    def rotate_key(self) -> str:
        """
        Force a key rotation. Every token signed by the previous key stops verifying.

        :returns: The new key identifier.
        """
        return self.signer.force_rotate().identifier

    def current_key_id(self) -> str:
        return self.signer.current_key_id()

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, token: str, ttl_seconds: int | None = None) -> RefreshOut:
        """
        Re-issue ``token`` with a new lifetime, keeping its application claims.

        Valid and merely expired tokens qualify. An expired token is
        re-checked without the expiry step so a revoked or forged token
        cannot renew itself by also being expired.

        :raises RefreshError: Carrying the verification error when ineligible.
        """
        decoded, verification = self._inspect(token)
        if verification.error == TOKEN_EXPIRED:
            decoded, recheck = self._inspect(token, check_expiry=False)
            if not recheck.valid:
                verification = recheck
        self.verifier.validate_for_refresh(verification)
        if decoded is None:  # pragma: no cover - validate_for_refresh raised
            raise RefreshError(error=VERIFICATION_FAILED)

        old_claims = decoded.claims
        carried = {k: v for k, v in old_claims.items() if k not in RESERVED_CLAIMS}
        new_token = self.issue(carried, ttl_seconds)
        self._event(
            logging.INFO,
            "token.refreshed",
            jti=old_claims.get("jti"),
            reason=verification.error or "valid",
        )
        return RefreshOut(token=new_token, old_token_expiry=int(old_claims["exp"]))
