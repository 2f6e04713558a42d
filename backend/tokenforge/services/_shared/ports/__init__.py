"""
tokenforge.services._shared.ports
=================================

Collection of *ports* (hexagonal interfaces) for the stateful and
environmental collaborators of the token service.

Modules
-------
- :mod:`clock`:
    Defines :class:`~.Clock`: injectable time source in whole seconds.

- :mod:`id_generator`:
    Defines :class:`~.TokenIdGenerator`: supplier of unique ``jti`` values.

- :mod:`revocation_store`:
    Defines :class:`~.RevocationStore` and :class:`~.RevocationEntry`:
    registry of revoked token identifiers.

Design Notes
------------
Each port ships with an in-process implementation next to it. The
deterministic doubles (``FixedClock``, ``SequentialTokenIdGenerator``) are
what the unit tests inject.
"""

from __future__ import annotations

from .clock import Clock, FixedClock, SystemClock
from .id_generator import (
    SequentialTokenIdGenerator,
    TokenIdGenerator,
    UuidTokenIdGenerator,
)
from .revocation_store import InMemoryRevocationStore, RevocationEntry, RevocationStore

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "TokenIdGenerator",
    "UuidTokenIdGenerator",
    "SequentialTokenIdGenerator",
    "RevocationStore",
    "RevocationEntry",
    "InMemoryRevocationStore",
]
