"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`tokenforge.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``tokenforge.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Errors (from ``tokenforge.services._shared.errors``)
    * :class:`ServiceError`, :class:`ValidationError`, :class:`DecodeError`,
      :class:`FormatError`, :class:`RefreshError`

- Token service (from ``tokenforge.services.tokens``)
    * :class:`TokenService`
    * DTOs: :class:`TokenConfig`, :class:`VerificationResult`, :class:`RefreshOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from ._shared.errors import (
    DecodeError,
    FormatError,
    RefreshError,
    ServiceError,
    ValidationError,
)

# Token lifecycle
from .tokens import RefreshOut, TokenConfig, TokenService, VerificationResult

__all__ = [
    "BaseService",
    "ServiceContext",
    "ServiceError",
    "ValidationError",
    "DecodeError",
    "FormatError",
    "RefreshError",
    "TokenService",
    "TokenConfig",
    "VerificationResult",
    "RefreshOut",
]
