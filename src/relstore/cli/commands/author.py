"""Author management commands."""

import click

from relstore.cli.error_handling import handle_denial, handle_domain_error
from relstore.domain.authors import AuthorService
from relstore.utils.date_parser import parse_datetime


@click.group()
def author_group():
    """Manage authors and their books."""
    pass


@author_group.command("create")
@click.argument("name")
@click.pass_context
def create_author(ctx, name: str):
    """Create a new author."""
    service = AuthorService(ctx.obj["store"])

    try:
        author_id = service.create_author(name)
        click.echo(f"Created author '{name}' (ID: {author_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@author_group.command("add-book")
@click.argument("author_id", type=int)
@click.argument("title")
@click.option(
    "--published-at",
    type=str,
    help="Publication date (YYYY-MM-DD, 'today', 'yesterday', ...)",
)
@click.pass_context
def add_book(ctx, author_id: int, title: str, published_at: str | None):
    """Add a book to an author, subject to the author's credit limit."""
    service = AuthorService(ctx.obj["store"])

    try:
        published = parse_datetime(published_at) if published_at else None
        result = service.add_book(author_id, title, published)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not result.allowed:
        handle_denial(ctx, result.denial)
        return
    click.echo(f"Added book '{title}' (ID: {result.record_id}) to author {author_id}")


@author_group.command("books")
@click.argument("author_id", type=int)
@click.option("--prefix", type=str, help="Only books whose title starts with this text")
@click.pass_context
def list_books(ctx, author_id: int, prefix: str | None):
    """List an author's books."""
    service = AuthorService(ctx.obj["store"])

    try:
        books = service.find_by_prefix(author_id, prefix) if prefix else service.books(author_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not books:
        click.echo("No books found.")
        return

    click.echo(f"{'ID':<6} {'Title':<40} {'Published':<12}")
    click.echo("-" * 60)
    for book in books:
        published = book.published_at.strftime("%Y-%m-%d") if book.published_at else ""
        click.echo(f"{book.id:<6} {(book.title or ''):<40} {published:<12}")


def register_commands(cli):
    """Register author commands with main CLI."""
    cli.add_command(author_group, name="author")
