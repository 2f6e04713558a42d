"""Application factory wiring the token service, logging and blueprints."""

from __future__ import annotations

from flask import Flask

from tokenforge.core.config import BaseConfig, get_config
from tokenforge.core.logger import configure_logging, init_app as init_logging
from tokenforge.services._shared.ports import Clock, TokenIdGenerator


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
    id_generator: TokenIdGenerator | None = None,
) -> Flask:
    """Build and configure the Flask application.

    ``clock`` and ``id_generator`` override the token service collaborators,
    which lets tests drive expiry and key rotation deterministically.
    """

    app = Flask(__name__)

    app.config.from_object(get_config() if config is None else config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from tokenforge.core import extensions

    extensions.init_app(app, clock=clock, id_generator=id_generator)

    init_logging(app)

    from tokenforge.core import cors

    cors.init_app(app)

    from tokenforge.api import init_app as init_api

    init_api(app)

    from tokenforge.core import errors

    errors.init_app(app)

    from tokenforge import cli as app_cli

    app_cli.init_app(app)

    return app
