"""Token lifecycle endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint

from tokenforge.api.deps import (
    empty_response,
    json_body,
    json_response,
    timing,
    token_service,
)
from tokenforge.schemas import (
    IssueTokenSchema,
    RefreshOutSchema,
    RefreshTokenSchema,
    RevokeTokenSchema,
    TokenInSchema,
    TokenOutSchema,
    VerificationOutSchema,
)

bp = Blueprint("tokens", __name__)

issue_schema = IssueTokenSchema()
token_in_schema = TokenInSchema()
refresh_schema = RefreshTokenSchema()
revoke_schema = RevokeTokenSchema()
token_out_schema = TokenOutSchema()
refresh_out_schema = RefreshOutSchema()
verification_schema = VerificationOutSchema()


@bp.post("")
@timing
def issue():
    """Issue a signed token for the supplied claims."""

    data = issue_schema.load(json_body())
    token = token_service().issue(data["claims"], data["ttl_seconds"])
    return json_response({"data": token_out_schema.dump({"token": token})}, status=201)


@bp.post("/verify")
@timing
def verify():
    """Verify a token. Untrustworthy tokens yield ``valid: false``, not an error status."""

    data = token_in_schema.load(json_body())
    result = token_service().verify(data["token"])
    return json_response({"data": verification_schema.dump(result.to_dict())})


@bp.post("/decode")
@timing
def decode():
    """Return a token's claims without checking trust."""

    data = token_in_schema.load(json_body())
    claims = token_service().decode(data["token"])
    return json_response({"data": claims})


@bp.post("/refresh")
@timing
def refresh():
    """Re-issue a valid or expired token with a new lifetime."""

    data = refresh_schema.load(json_body())
    out = token_service().refresh(data["token"], data["ttl_seconds"])
    return json_response({"data": refresh_out_schema.dump(out)})


@bp.post("/revocations")
@timing
def revoke():
    """Revoke a token by ``jti``. Re-revoking is a no-op."""

    data = revoke_schema.load(json_body())
    token_service().revoke(data["jti"], data["reason"])
    return empty_response()


@bp.get("/revocations")
@timing
def revocation_count():
    """Return the number of revoked identifiers."""

    return json_response({"data": {"count": token_service().revocation_count()}})


@bp.delete("/revocations")
@timing
def clear_revocations():
    """Forget every revocation."""

    token_service().clear_revocations()
    return empty_response()
