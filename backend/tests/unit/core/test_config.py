"""Unit tests for configuration loading."""

from __future__ import annotations

import pytest

from tokenforge.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)
from tokenforge.services._shared.errors import ValidationError
from tokenforge.services.tokens import TokenConfig


@pytest.mark.parametrize(
    ("env", "expected"),
    [("testing", TestingConfig), ("production", ProductionConfig), ("bogus", DevelopmentConfig)],
)
def test_get_config_uses_app_env(monkeypatch: pytest.MonkeyPatch, env: str, expected: type) -> None:
    monkeypatch.setenv("APP_ENV", env)
    assert get_config() is expected


def test_get_config_defaults_to_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config() is DevelopmentConfig


def test_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_INT", " 42 ")
    assert env_int("SOME_INT", 1) == 42
    monkeypatch.setenv("SOME_INT", "")
    assert env_int("SOME_INT", 1) == 1
    monkeypatch.delenv("SOME_INT")
    assert env_int("SOME_INT", 7) == 7


def test_env_int_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_INT", "ten")
    with pytest.raises(ValueError):
        env_int("SOME_INT", 1)


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("Yes", True), ("off", False)])
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("SOME_FLAG", raw)
    assert env_bool("SOME_FLAG") is expected


def test_token_config_from_mapping() -> None:
    cfg = TokenConfig.from_mapping(
        {
            "TOKEN_ROTATION_INTERVAL_SECONDS": "60",
            "TOKEN_SIGNATURE_LENGTH": 24,
            "TOKEN_DEFAULT_TTL_SECONDS": 120,
        }
    )
    assert cfg.rotation_interval_seconds == 60
    assert cfg.signature_length == 24
    assert cfg.default_ttl_seconds == 120
    assert cfg.algorithm == "HS-SIM"
    assert cfg.key_bytes == 32


def test_token_config_defaults_match_testing_config() -> None:
    cfg = TokenConfig.from_mapping(
        {k: getattr(TestingConfig, k) for k in dir(TestingConfig) if k.startswith("TOKEN_")}
    )
    assert cfg == TokenConfig()


@pytest.mark.parametrize(
    "overrides",
    [
        {"rotation_interval_seconds": 0},
        {"signature_length": 0},
        {"signature_length": 44},
        {"default_ttl_seconds": -1},
        {"key_bytes": 8},
    ],
)
def test_token_config_rejects_invalid_values(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        TokenConfig(**overrides)


@pytest.mark.parametrize(
    ("key", "raw"),
    [
        ("TOKEN_SIGNATURE_LENGTH", "sixteen"),
        ("TOKEN_ROTATION_INTERVAL_SECONDS", None),
        ("TOKEN_KEY_BYTES", "32 bytes"),
    ],
)
def test_token_config_from_mapping_rejects_non_numeric(key: str, raw: object) -> None:
    with pytest.raises(ValidationError, match=key):
        TokenConfig.from_mapping({key: raw})
