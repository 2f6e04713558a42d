"""Flask CLI commands for issuing and inspecting tokens from a shell."""

from __future__ import annotations

import json
import logging

import click
from flask.cli import with_appcontext

from tokenforge.core.extensions import get_token_service
from tokenforge.services import ServiceError

LOGGER = logging.getLogger(__name__)


def _parse_claims(raw: str) -> dict:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc.msg}", param_hint="--claims") from exc
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--claims")
    return value


@click.group("tokens")
def tokens_cli() -> None:
    """Token issuance and inspection commands.

    Keys and revocations live in process memory, so a token issued here only
    verifies inside this same process. ``decode`` needs no key at all.
    """


@tokens_cli.command("issue")
@click.option("--claims", "raw_claims", default="{}", show_default=True, help="JSON object of claims.")
@click.option("--ttl", "ttl_seconds", type=click.IntRange(min=1), default=None, help="Lifetime in seconds.")
@with_appcontext
def issue_command(raw_claims: str, ttl_seconds: int | None) -> None:
    """Issue a token and print it."""
    service = get_token_service()
    try:
        token = service.issue(_parse_claims(raw_claims), ttl_seconds)
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(token)


@tokens_cli.command("decode")
@click.argument("token")
@with_appcontext
def decode_command(token: str) -> None:
    """Print a token's claims as JSON without verifying it."""
    try:
        claims = get_token_service().decode(token)
    except ServiceError as exc:
        LOGGER.debug("cli.decode_failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(claims, indent=2, sort_keys=True, ensure_ascii=False))


@tokens_cli.command("config")
@with_appcontext
def config_command() -> None:
    """Print the effective token configuration."""
    cfg = get_token_service().cfg
    click.echo(json.dumps(cfg.as_dict(), indent=2, sort_keys=True))
