"""CLI error handling helpers."""

import click

from relstore.domain.errors import DomainError, GatingDenied


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_denial(ctx: click.Context, denial: GatingDenied) -> None:
    """Render a gate denial and exit with failure."""
    click.echo(f"Error: {denial.message}", err=True)
    ctx.exit(1)
