"""CLI error handling helpers."""

import click

from bizledger.domain.errors import CommitFailedError, DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | CommitFailedError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    fields = getattr(error, "fields", None)
    if fields:
        for name, message in fields.items():
            click.echo(f"  {name}: {message}", err=True)
    ctx.exit(1)
