"""Unit tests for the TokenVerifier state machine."""

from __future__ import annotations

import pytest

from tokenforge.services._shared.errors import FormatError, RefreshError
from tokenforge.services._shared.ports import FixedClock, InMemoryRevocationStore
from tokenforge.services.tokens import (
    INVALID_SIGNATURE,
    TOKEN_EXPIRED,
    TOKEN_REVOKED,
    VERIFICATION_FAILED,
    DecodedToken,
    KeySigner,
    TokenVerifier,
    VerificationResult,
)


@pytest.fixture()
def verifier(
    clock: FixedClock, revocations: InMemoryRevocationStore, signer: KeySigner
) -> TokenVerifier:
    return TokenVerifier(clock=clock, revocations=revocations, signer=signer)


def _decoded(signer: KeySigner, *, exp: int, jti: str = "j1", sign: bool = True) -> DecodedToken:
    header, claims = "aGVhZGVy", "Y2xhaW1z"
    signature = signer.sign(f"{header}.{claims}") if sign else "A" * 16
    return DecodedToken(
        header={"alg": "HS-SIM", "typ": "JWT", "kid": signer.current_key_id()},
        claims={"exp": exp, "jti": jti, "userId": 1},
        encoded_header=header,
        encoded_claims=claims,
        signature=signature,
    )


def test_valid_token(verifier: TokenVerifier, signer: KeySigner, clock: FixedClock) -> None:
    result = verifier.evaluate(_decoded(signer, exp=clock.now() + 10))
    assert result.valid is True
    assert result.payload == {"exp": clock.now() + 10, "jti": "j1", "userId": 1}
    assert result.error is None


def test_exp_equal_to_now_is_still_valid(
    verifier: TokenVerifier, signer: KeySigner, clock: FixedClock
) -> None:
    assert verifier.evaluate(_decoded(signer, exp=clock.now())).valid is True


def test_expiry_reported_before_revocation_and_signature(
    verifier: TokenVerifier,
    signer: KeySigner,
    clock: FixedClock,
    revocations: InMemoryRevocationStore,
) -> None:
    revocations.revoke("j1", "test")
    result = verifier.evaluate(_decoded(signer, exp=clock.now() - 1, sign=False))
    assert result == VerificationResult.fail(TOKEN_EXPIRED)


def test_revocation_reported_before_signature(
    verifier: TokenVerifier,
    signer: KeySigner,
    clock: FixedClock,
    revocations: InMemoryRevocationStore,
) -> None:
    revocations.revoke("j1", "test")
    result = verifier.evaluate(_decoded(signer, exp=clock.now() + 10, sign=False))
    assert result.error == TOKEN_REVOKED


def test_bad_signature(verifier: TokenVerifier, signer: KeySigner, clock: FixedClock) -> None:
    result = verifier.evaluate(_decoded(signer, exp=clock.now() + 10, sign=False))
    assert result.error == INVALID_SIGNATURE


def test_skipping_expiry_exposes_later_checks(
    verifier: TokenVerifier, signer: KeySigner, clock: FixedClock
) -> None:
    decoded = _decoded(signer, exp=clock.now() - 100)
    assert verifier.evaluate(decoded, check_expiry=False).valid is True


@pytest.mark.parametrize("exp", [None, "123", 1.5, True])
def test_missing_or_mistyped_exp_is_a_format_error(
    verifier: TokenVerifier, signer: KeySigner, exp: object
) -> None:
    decoded = _decoded(signer, exp=0)
    claims = dict(decoded.claims)
    if exp is None:
        claims.pop("exp")
    else:
        claims["exp"] = exp
    broken = DecodedToken(
        header=decoded.header,
        claims=claims,
        encoded_header=decoded.encoded_header,
        encoded_claims=decoded.encoded_claims,
        signature=decoded.signature,
    )
    with pytest.raises(FormatError):
        verifier.evaluate(broken)


def _without_kid(decoded: DecodedToken) -> DecodedToken:
    return DecodedToken(
        header={"alg": "HS-SIM", "typ": "JWT"},
        claims=decoded.claims,
        encoded_header=decoded.encoded_header,
        encoded_claims=decoded.encoded_claims,
        signature=decoded.signature,
    )


def test_missing_kid_fails_signature_step(
    verifier: TokenVerifier, signer: KeySigner, clock: FixedClock
) -> None:
    result = verifier.evaluate(_without_kid(_decoded(signer, exp=clock.now() + 10)))
    assert result == VerificationResult.fail(INVALID_SIGNATURE)


def test_missing_kid_on_expired_token_reports_expiry(
    verifier: TokenVerifier, signer: KeySigner, clock: FixedClock
) -> None:
    result = verifier.evaluate(_without_kid(_decoded(signer, exp=clock.now() - 10)))
    assert result.error == TOKEN_EXPIRED


def test_missing_kid_on_revoked_token_reports_revocation(
    verifier: TokenVerifier,
    signer: KeySigner,
    clock: FixedClock,
    revocations: InMemoryRevocationStore,
) -> None:
    revocations.revoke("j1", "test")
    result = verifier.evaluate(_without_kid(_decoded(signer, exp=clock.now() + 10)))
    assert result.error == TOKEN_REVOKED


# ---------------------------- refresh rule --------------------------------- #


@pytest.mark.parametrize(
    "verification",
    [VerificationResult.ok({"exp": 1}), VerificationResult.fail(TOKEN_EXPIRED)],
)
def test_validate_for_refresh_allows_valid_and_expired(verification: VerificationResult) -> None:
    TokenVerifier.validate_for_refresh(verification)


@pytest.mark.parametrize("error", [TOKEN_REVOKED, INVALID_SIGNATURE, VERIFICATION_FAILED])
def test_validate_for_refresh_rejects_others(error: str) -> None:
    with pytest.raises(RefreshError) as excinfo:
        TokenVerifier.validate_for_refresh(VerificationResult.fail(error))
    assert excinfo.value.error == error
    assert error in str(excinfo.value)
