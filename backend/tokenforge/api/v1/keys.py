"""Signing key administration endpoints."""

from __future__ import annotations

from flask import Blueprint

from tokenforge.api.deps import json_response, timing, token_service

bp = Blueprint("keys", __name__)


@bp.post("/rotate")
@timing
def rotate():
    """Force a key rotation; tokens signed by the previous key stop verifying."""

    kid = token_service().rotate_key()
    return json_response({"data": {"kid": kid}})
