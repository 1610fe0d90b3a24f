"""Turn ledger failures into command line errors."""

import logging
from typing import NoReturn

import click

from troopfund.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> NoReturn:
    """Print ``Error: <message>`` to stderr and stop with exit status 1."""
    logger.debug("%s failed with %s", ctx.command_path, type(error).__name__)
    click.secho(f"Error: {error}", err=True, fg="red")
    ctx.exit(1)
