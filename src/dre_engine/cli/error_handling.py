"""CLI error handling helpers."""

import click

from dre_engine.domain.errors import DataAccessError, DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, DataAccessError):
        click.echo(f"Error: could not compute report: {error}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
