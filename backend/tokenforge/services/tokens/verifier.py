# tokenforge/services/tokens/verifier.py
from __future__ import annotations

from tokenforge.services._shared.errors import FormatError, RefreshError
from tokenforge.services._shared.ports.clock import Clock
from tokenforge.services._shared.ports.revocation_store import RevocationStore
from tokenforge.services.tokens.dto import DecodedToken, VerificationResult
from tokenforge.services.tokens.signer import KeySigner

TOKEN_EXPIRED = "Token expired"
TOKEN_REVOKED = "Token revoked"
INVALID_SIGNATURE = "Invalid signature"
VERIFICATION_FAILED = "Verification failed"


class TokenVerifier:
    """
    Validation state machine for decoded tokens.

    Checks run in a fixed, short-circuiting order: expiry, then revocation,
    then signature. Callers rely on the resulting error strings, so the
    order is part of the contract.
    """

    def __init__(self, *, clock: Clock, revocations: RevocationStore, signer: KeySigner) -> None:
        self.clock = clock
        self.revocations = revocations
        self.signer = signer

    def evaluate(self, decoded: DecodedToken, *, check_expiry: bool = True) -> VerificationResult:
        """
        Run the checks on ``decoded``.

        :param check_expiry: Skip step 1 when ``False`` (refresh of an expired token).
        :raises FormatError: If ``exp`` is missing or not an integer.
        """
        claims = decoded.claims
        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, int):
            raise FormatError("Token claims lack an integer 'exp'")

        if check_expiry and exp < self.clock.now():
            return VerificationResult.fail(TOKEN_EXPIRED)

        jti = claims.get("jti")
        if isinstance(jti, str) and self.revocations.is_revoked(jti):
            return VerificationResult.fail(TOKEN_REVOKED)

        kid = decoded.header.get("kid")
        if not self.signer.verify(decoded.signing_input, decoded.signature, kid):
            return VerificationResult.fail(INVALID_SIGNATURE)

        return VerificationResult.ok(claims)

    @staticmethod
    def validate_for_refresh(verification: VerificationResult) -> None:
        """
        Allow refresh of valid or merely expired tokens only.

        :raises RefreshError: Carrying the underlying verification error.
        """
        if verification.valid or verification.error == TOKEN_EXPIRED:
            return
        raise RefreshError(error=verification.error or VERIFICATION_FAILED)
