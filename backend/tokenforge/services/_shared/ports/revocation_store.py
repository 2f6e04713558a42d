from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol

from tokenforge.services._shared.errors import ValidationError
from tokenforge.services._shared.ports.clock import Clock, SystemClock

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RevocationEntry:
    """
    Record of an explicit revocation.

    :ivar jti: Revoked token identifier.
    :ivar reason: Free-form reason supplied by the caller.
    :ivar revoked_at: Epoch seconds at which the revocation was recorded.
    """

    jti: str
    reason: str
    revoked_at: int


class RevocationStore(Protocol):
    """
    Abstraction for the set of revoked token identifiers.

    ``revoke`` is idempotent; ``is_revoked`` never raises.
    """

    def revoke(self, jti: str, reason: str) -> None: ...
    def is_revoked(self, jti: str | None) -> bool: ...
    def get(self, jti: str) -> RevocationEntry | None: ...
    def count(self) -> int: ...
    def clear(self) -> None: ...


class InMemoryRevocationStore(RevocationStore):
    """
    Process-local revocation registry keyed by ``jti``.

    Entries never expire on their own; :meth:`clear` is the only eviction
    path and makes every previously revoked identifier valid again.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._revoked: dict[str, RevocationEntry] = {}
        self._lock = threading.Lock()

    def revoke(self, jti: str, reason: str) -> None:
        if not isinstance(jti, str) or not jti:
            raise ValidationError("jti must be a non-empty string")
        with self._lock:
            if jti in self._revoked:
                return
            self._revoked[jti] = RevocationEntry(
                jti=jti, reason=reason or "", revoked_at=self._clock.now()
            )
        log.info("token.revoked", extra={"jti": jti, "reason": reason})

    def is_revoked(self, jti: str | None) -> bool:
        if not jti:
            return False
        with self._lock:
            return jti in self._revoked

    def get(self, jti: str) -> RevocationEntry | None:
        with self._lock:
            return self._revoked.get(jti)

    def count(self) -> int:
        with self._lock:
            return len(self._revoked)

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._revoked)
            self._revoked.clear()
        log.warning("revocations.cleared", extra={"count": dropped})
