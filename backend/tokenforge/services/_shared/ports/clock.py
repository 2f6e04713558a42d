from __future__ import annotations

import threading
import time
from typing import Protocol


class Clock(Protocol):
    """Port supplying the current time in whole seconds since the epoch."""

    def now(self) -> int: ...


class SystemClock(Clock):
    """Wall-clock time source backed by :func:`time.time`."""

    def now(self) -> int:
        return int(time.time())


class FixedClock(Clock):
    """
    Manually driven clock used in unit tests.

    .. note::
       Uses a threading lock so ``advance`` is safe from worker threads.
    """

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = int(start)
        self._lock = threading.Lock()

    def now(self) -> int:
        return self._now

    def set(self, value: int) -> None:
        with self._lock:
            self._now = int(value)

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new value."""
        with self._lock:
            self._now += int(seconds)
            return self._now
