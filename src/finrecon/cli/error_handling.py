"""CLI error handling helpers."""

import logging

import click

from finrecon.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print a rejected request as ``Error: <reason>`` and exit with status 1."""
    logger.debug("%s rejected: %s", ctx.command_path, type(error).__name__, exc_info=error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
