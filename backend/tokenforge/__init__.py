"""Issue, verify, revoke and refresh compact signed tokens.

Exposes the application factory and the framework-free :class:`TokenService`
so callers can ``from tokenforge import TokenService`` without traversing the
package structure.
"""

from __future__ import annotations

from .factory import create_app
from .services.tokens import TokenConfig, TokenService, VerificationResult

__all__ = ["create_app", "TokenService", "TokenConfig", "VerificationResult"]
