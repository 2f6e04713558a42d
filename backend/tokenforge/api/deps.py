"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request

from tokenforge.core.extensions import get_token_service
from tokenforge.core.logger import ensure_request_id
from tokenforge.services import ServiceContext, TokenService

F = TypeVar("F", bound=Callable[..., Any])


def token_service() -> TokenService:
    """Return the app's token service bound to the current request context."""

    return get_token_service().with_context(
        ServiceContext(request_id=ensure_request_id(), actor=request.remote_addr)
    )


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping when absent."""

    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def empty_response(status: int = 204) -> Response:
    """Return a body-less response."""

    return Response(status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
