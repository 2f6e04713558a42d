# tokenforge/services/tokens/signer.py
from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import threading
import time
from dataclasses import dataclass

from tokenforge.services._shared.ports.clock import Clock, SystemClock
from tokenforge.services.tokens import codec
from tokenforge.services.tokens.dto import TokenConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SigningKey:
    """
    Immutable signing key. Rotation replaces the whole object, never mutates it.

    :ivar identifier: Key id written into token headers (``kid``).
    :ivar material: Secret HMAC key bytes.
    :ivar created_at: Epoch seconds when the key was generated.
    """

    identifier: str
    material: bytes
    created_at: int

    def __repr__(self) -> str:
        return f"SigningKey(identifier={self.identifier!r}, created_at={self.created_at})"


class KeySigner:
    """
    Owner of the single active signing key.

    * The key is created lazily on first use and replaced on rotation; the
      previous key is discarded, so tokens it signed no longer verify.
    * Installing a new key is one reference assignment under ``_lock``;
      readers take a snapshot of ``_key`` and sign without holding the lock.
    * Signatures are HMAC-SHA256 digests in the codec alphabet, truncated to
      ``signature_length`` characters.
    """

    def __init__(self, *, clock: Clock | None = None, config: TokenConfig | None = None) -> None:
        self.clock = clock or SystemClock()
        self.cfg = config or TokenConfig()
        self._key: SigningKey | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Key lifecycle
    # ------------------------------------------------------------------ #

    def active_key(self) -> SigningKey:
        """Return the active key snapshot, creating the first key if needed."""
        key = self._key
        if key is not None:
            return key
        with self._lock:
            if self._key is None:
                self._install(reason="initial")
            return self._key  # type: ignore[return-value]

    def current_key_id(self) -> str:
        return self.active_key().identifier

    def rotate_if_due(self) -> bool:
        """
        Rotate when no key exists or the active key is older than the interval.

        :returns: ``True`` if a new key was installed.
        """
        with self._lock:
            key = self._key
            if key is not None and self.clock.now() - key.created_at <= self.cfg.rotation_interval_seconds:
                return False
            self._install(reason="initial" if key is None else "scheduled")
            return True

    def force_rotate(self) -> SigningKey:
        """Unconditionally install a new key and return it."""
        with self._lock:
            return self._install(reason="forced")

    def _install(self, *, reason: str) -> SigningKey:
        # Caller holds ``_lock``.
        previous = self._key
        key = SigningKey(
            identifier=self._new_identifier(),
            material=secrets.token_bytes(self.cfg.key_bytes),
            created_at=self.clock.now(),
        )
        self._key = key
        log.info(
            "key.rotated",
            extra={
                "kid": key.identifier,
                "previous_kid": previous.identifier if previous else None,
                "reason": reason,
            },
        )
        return key

    @staticmethod
    def _new_identifier() -> str:
        return f"{time.time_ns():x}-{secrets.token_hex(4)}"

    # ------------------------------------------------------------------ #
    # Signing
    # ------------------------------------------------------------------ #

    def sign(self, data: str, *, key: SigningKey | None = None) -> str:
        """
        Sign ``data`` with the active key, or with ``key`` when the caller
        already holds the snapshot whose identifier it wrote into a header.
        """
        key = key or self.active_key()
        digest = hmac.new(key.material, data.encode("utf-8"), hashlib.sha256).digest()
        return codec.encode_bytes(digest)[: self.cfg.signature_length]

    def verify(self, data: str, signature: str, key_id: str | None) -> bool:
        """
        Check ``signature`` over ``data``.

        Returns ``False`` straight away when ``key_id`` is not the active key:
        superseded keys are gone and cannot verify anything.
        """
        key = self._key
        if key is None or key_id != key.identifier:
            return False
        if not isinstance(signature, str):
            return False
        expected = self.sign(data, key=key)
        return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
