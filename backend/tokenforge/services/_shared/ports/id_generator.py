from __future__ import annotations

import threading
from typing import Protocol
from uuid import uuid4


class TokenIdGenerator(Protocol):
    """Port producing a collision-resistant token identifier (``jti``) per call."""

    def next(self) -> str: ...


class UuidTokenIdGenerator(TokenIdGenerator):
    """Random 128-bit identifiers rendered as 32 hex characters."""

    def next(self) -> str:
        return uuid4().hex


class SequentialTokenIdGenerator(TokenIdGenerator):
    """Deterministic ``jti`` supplier used in unit tests."""

    def __init__(self, prefix: str = "jti") -> None:
        self._prefix = prefix
        self._seq = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._seq += 1
            return f"{self._prefix}-{self._seq}"
