"""Entry commands."""

import click

from relstore.cli.error_handling import handle_domain_error
from relstore.domain.entries import EntryService


@click.group()
def entry_group():
    """Manage entries wrapping messages and comments."""
    pass


@entry_group.command("create-message")
@click.argument("subject")
@click.option("--body", type=str, help="Message body")
@click.pass_context
def create_message(ctx, subject: str, body: str | None):
    """Create a message entry."""
    service = EntryService(ctx.obj["store"])

    try:
        entry_id = service.create_message(subject, body)
        click.echo(f"Created message entry (ID: {entry_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entry_group.command("create-comment")
@click.argument("content")
@click.pass_context
def create_comment(ctx, content: str):
    """Create a comment entry."""
    service = EntryService(ctx.obj["store"])

    try:
        entry_id = service.create_comment(content)
        click.echo(f"Created comment entry (ID: {entry_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entry_group.command("title")
@click.argument("entry_id", type=int)
@click.pass_context
def entry_title(ctx, entry_id: int):
    """Print the title of an entry."""
    service = EntryService(ctx.obj["store"])

    try:
        click.echo(service.title(entry_id))
    except ValueError as e:
        handle_domain_error(ctx, e)


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def delete_entry(ctx, entry_id: int):
    """Delete an entry and its payload."""
    service = EntryService(ctx.obj["store"])

    try:
        removed = service.delete_entry(entry_id)
        click.echo(f"Deleted entry {entry_id} ({removed} row(s) removed)")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
