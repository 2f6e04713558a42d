# tokenforge/services/_shared/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (tracing ids, caller hints).

    :param request_id: Correlation id for logging/tracing.
    :param actor: Optional free-form caller label (e.g. API client name).
    """

    request_id: str | None = None
    actor: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the optional request-scoped :class:`ServiceContext`.
    * Centralize structured logging so every event carries the context.
    * Keep services thin, orchestration-only, no web leakage.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()
        self.log = logging.getLogger(type(self).__module__)

    def _event(self, level: int, event: str, **fields: Any) -> None:
        """Emit ``event`` with ``fields`` plus the context as log ``extra``."""
        extra = {k: v for k, v in fields.items() if v is not None}
        if self.ctx.request_id:
            extra.setdefault("request_id", self.ctx.request_id)
        self.log.log(level, event, extra=extra)
