"""Pytest fixtures wiring token services and Flask apps to deterministic doubles.

Every fixture builds fresh state (keys, revocations) so tests never observe
each other's tokens.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask

from tokenforge import create_app
from tokenforge.core.config import TestingConfig
from tokenforge.services._shared.ports import (
    FixedClock,
    InMemoryRevocationStore,
    SequentialTokenIdGenerator,
)
from tokenforge.services.tokens import KeySigner, TokenConfig, TokenService


@pytest.fixture()
def clock() -> FixedClock:
    """Manually driven clock starting at a fixed epoch second."""

    return FixedClock(start=1_700_000_000)


@pytest.fixture()
def ids() -> SequentialTokenIdGenerator:
    """Deterministic ``jti`` supplier yielding ``jti-1``, ``jti-2``, ..."""

    return SequentialTokenIdGenerator()


@pytest.fixture()
def token_config() -> TokenConfig:
    """Default token settings (one-day rotation, 16-char signatures)."""

    return TokenConfig()


@pytest.fixture()
def signer(clock: FixedClock, token_config: TokenConfig) -> KeySigner:
    """Key signer sharing the test clock."""

    return KeySigner(clock=clock, config=token_config)


@pytest.fixture()
def revocations(clock: FixedClock) -> InMemoryRevocationStore:
    """Empty in-memory revocation registry."""

    return InMemoryRevocationStore(clock=clock)


@pytest.fixture()
def service(
    signer: KeySigner,
    revocations: InMemoryRevocationStore,
    clock: FixedClock,
    ids: SequentialTokenIdGenerator,
    token_config: TokenConfig,
) -> TokenService:
    """Build a TokenService wired to the shared in-memory doubles."""

    return TokenService(
        signer=signer,
        revocations=revocations,
        clock=clock,
        id_generator=ids,
        config=token_config,
    )


@pytest.fixture()
def app(clock: FixedClock, ids: SequentialTokenIdGenerator) -> Generator[Flask, None, None]:
    """Create a Flask application for tests with its own token state."""

    application = create_app(TestingConfig, clock=clock, id_generator=ids)
    with application.app_context():
        yield application


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
