"""CLI error handling helpers."""

import logging

import click

from expense_tracker.domain.errors import DomainError, StorageError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with status 1.

    Storage failures also keep their traceback in the debug log, so running
    with ``--debug`` shows the underlying database error.
    """
    if isinstance(error, StorageError):
        logger.debug("Storage failure in '%s'", ctx.command_path, exc_info=error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
