"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between the token
components and the callers of :class:`~tokenforge.services.tokens.service.TokenService`.

The translation to HTTP responses (RFC 7807) is handled by
``tokenforge/core/errors.py``.

Only *malformed input* is exceptional. Well-formed but untrustworthy tokens
(expired, revoked, bad signature) are reported through
:class:`~tokenforge.services.tokens.dto.VerificationResult` instead.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` responses.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """
    Raised for invalid input to the registry, codec or assembler.

    Examples: empty ``jti``, non-positive ttl, non-serializable claims.
    """

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message)


class DecodeError(ValidationError):
    """Raised by the codec when text is not a valid URL-safe encoding."""

    def __init__(self, message: str = "Invalid URL-safe encoding") -> None:
        super().__init__(message)


class FormatError(ServiceError):
    """
    Raised when a token's structure is malformed.

    Wrong segment count, undecodable segment or unparsable JSON.
    """

    def __init__(self, message: str = "Invalid token format") -> None:
        super().__init__(message)


@dataclass(slots=True)
class RefreshError(ServiceError):
    """
    Raised when a token is not eligible for refresh.

    :param error: Underlying verification error (e.g. ``"Token revoked"``).
    :type error: str
    """

    error: str

    def __str__(self) -> str:
        return f"Token not eligible for refresh: {self.error}"


__all__ = [
    "ServiceError",
    "ValidationError",
    "DecodeError",
    "FormatError",
    "RefreshError",
]
