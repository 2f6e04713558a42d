"""Per-application token service instance and initialization helpers."""

from __future__ import annotations

from flask import Flask, current_app

from tokenforge.services._shared.ports import (
    Clock,
    InMemoryRevocationStore,
    SystemClock,
    TokenIdGenerator,
    UuidTokenIdGenerator,
)
from tokenforge.services.tokens import KeySigner, TokenConfig, TokenService

EXTENSION_KEY = "token_service"


def build_token_service(
    config: TokenConfig,
    *,
    clock: Clock | None = None,
    id_generator: TokenIdGenerator | None = None,
) -> TokenService:
    """Wire a :class:`TokenService` and its shared stateful collaborators."""
    clock = clock or SystemClock()
    signer = KeySigner(clock=clock, config=config)
    return TokenService(
        signer=signer,
        revocations=InMemoryRevocationStore(clock=clock),
        clock=clock,
        id_generator=id_generator or UuidTokenIdGenerator(),
        config=config,
    )


def init_app(
    app: Flask,
    *,
    clock: Clock | None = None,
    id_generator: TokenIdGenerator | None = None,
) -> None:
    """Build the token service from ``TOKEN_*`` settings and bind it to ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application receiving the service under ``app.extensions``.
    clock, id_generator:
        Optional overrides, mainly for tests.

    Notes
    -----
    Each application owns its own key and revocation state; nothing is kept
    at module level.
    """
    cfg = TokenConfig.from_mapping(app.config)
    app.extensions[EXTENSION_KEY] = build_token_service(
        cfg, clock=clock, id_generator=id_generator
    )


def get_token_service(app: Flask | None = None) -> TokenService:
    """Return the token service bound to ``app`` (default: the current app)."""
    target = app or current_app
    service = target.extensions.get(EXTENSION_KEY)
    if service is None:
        raise RuntimeError("Token service is not initialized. Call init_app() first.")
    return service
