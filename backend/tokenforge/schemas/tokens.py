"""Token-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class IssueTokenSchema(Schema):
    """Input payload for issuing a token."""

    claims = fields.Dict(keys=fields.String(), load_default=dict)
    ttl_seconds = fields.Integer(strict=True, load_default=None, validate=validate.Range(min=1))


class TokenInSchema(Schema):
    """Input payload carrying a single encoded token."""

    token = fields.String(required=True, validate=validate.Length(min=1))


class RefreshTokenSchema(TokenInSchema):
    """Input payload for refreshing a token."""

    ttl_seconds = fields.Integer(strict=True, load_default=None, validate=validate.Range(min=1))


class RevokeTokenSchema(Schema):
    """Input payload for revoking a token by ``jti``."""

    jti = fields.String(required=True, validate=validate.Length(min=1, max=256))
    reason = fields.String(load_default="", validate=validate.Length(max=500))


class TokenOutSchema(Schema):
    """Response payload containing an issued token."""

    token = fields.String(required=True)


class RefreshOutSchema(Schema):
    """Response payload of a refresh."""

    token = fields.String(required=True)
    old_token_expiry = fields.Integer(required=True, data_key="oldTokenExpiry")


class VerificationOutSchema(Schema):
    """Response payload of a verification; absent fields are omitted."""

    valid = fields.Boolean(required=True)
    payload = fields.Dict()
    error = fields.String()
