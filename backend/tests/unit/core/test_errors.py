"""Unit tests for service-to-HTTP error translation."""

from __future__ import annotations

from tokenforge.core.errors import (
    BadRequest,
    Unauthorized,
    Unprocessable,
    translate_service_error,
)
from tokenforge.services._shared.errors import (
    DecodeError,
    FormatError,
    RefreshError,
    ServiceError,
    ValidationError,
)


def test_format_error_maps_to_400() -> None:
    err = translate_service_error(FormatError())
    assert isinstance(err, BadRequest)
    assert err.status_code == 400
    assert err.code == "malformed_token"
    assert err.message == "Invalid token format"


def test_validation_errors_map_to_422() -> None:
    for exc in (ValidationError("ttl_seconds must be a positive integer"), DecodeError()):
        err = translate_service_error(exc)
        assert isinstance(err, Unprocessable)
        assert err.status_code == 422
        assert err.code == "validation_error"


def test_refresh_error_maps_to_401_with_reason() -> None:
    err = translate_service_error(RefreshError(error="Token revoked"))
    assert isinstance(err, Unauthorized)
    assert err.status_code == 401
    assert err.code == "refresh_denied"
    assert err.details == {"reason": "Token revoked"}
    assert err.message == "Token not eligible for refresh: Token revoked"


def test_unknown_service_error_maps_to_400() -> None:
    err = translate_service_error(ServiceError())
    assert err.status_code == 400
    assert err.message == "Service error"
