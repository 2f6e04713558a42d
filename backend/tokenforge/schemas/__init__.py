"""Marshmallow schemas for request validation and response shaping."""

from __future__ import annotations

from .tokens import (
    IssueTokenSchema,
    RefreshOutSchema,
    RefreshTokenSchema,
    RevokeTokenSchema,
    TokenInSchema,
    TokenOutSchema,
    VerificationOutSchema,
)

__all__ = [
    "IssueTokenSchema",
    "TokenInSchema",
    "RefreshTokenSchema",
    "RevokeTokenSchema",
    "TokenOutSchema",
    "RefreshOutSchema",
    "VerificationOutSchema",
]
