"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from tokenforge.api.deps import json_response, timing
from tokenforge.core.extensions import get_token_service

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application health and signing key information."""

    service = get_token_service()
    payload = {
        "status": "ok",
        "version": current_app.config.get("APP_VERSION", "dev"),
        "kid": service.current_key_id(),
        "revoked": service.revocation_count(),
    }
    return json_response(payload)
