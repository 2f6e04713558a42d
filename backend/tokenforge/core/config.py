"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable.

    Blank or unset values yield ``default``; anything else must parse as an
    integer or :class:`ValueError` is raised so misconfiguration fails loudly.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val.strip())


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    TOKEN_ROTATION_INTERVAL_SECONDS: int
        Maximum age of the active signing key; the first issuance after it
        elapses rotates the key. Defaults to one day.
    TOKEN_SIGNATURE_LENGTH: int
        Characters kept from the HMAC signature (1..43, default 16).
    TOKEN_ALGORITHM: str
        Label written into every header's ``alg`` field.
    TOKEN_DEFAULT_TTL_SECONDS: int
        Lifetime applied when a caller does not supply ``ttl_seconds``.
    TOKEN_KEY_BYTES: int
        Size of generated key material.
    JSON_SORT_KEYS: bool
        Keeps JSON output order stable when ``False``.
    PROPAGATE_EXCEPTIONS: bool
        Controls Flask error propagation.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Tokens / keys
    TOKEN_ROTATION_INTERVAL_SECONDS = env_int("TOKEN_ROTATION_INTERVAL_SECONDS", 86400)
    TOKEN_SIGNATURE_LENGTH = env_int("TOKEN_SIGNATURE_LENGTH", 16)
    TOKEN_ALGORITHM = os.getenv("TOKEN_ALGORITHM", "HS-SIM")
    TOKEN_DEFAULT_TTL_SECONDS = env_int("TOKEN_DEFAULT_TTL_SECONDS", 3600)
    TOKEN_KEY_BYTES = env_int("TOKEN_KEY_BYTES", 32)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Pins token settings to their defaults so a developer ``.env`` cannot
      change test expectations.
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    LOG_LEVEL = "WARNING"
    TOKEN_ROTATION_INTERVAL_SECONDS = 86400
    TOKEN_SIGNATURE_LENGTH = 16
    TOKEN_ALGORITHM = "HS-SIM"
    TOKEN_DEFAULT_TTL_SECONDS = 3600
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug disabled while relying on WSGI-level log configuration for
    noise control.
    """

    DEBUG = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
