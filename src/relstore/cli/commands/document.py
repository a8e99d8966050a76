"""Document management commands."""

import click

from relstore.cli.error_handling import handle_domain_error
from relstore.domain.documents import DocumentService


@click.group()
def document_group():
    """Manage documents, sections and paragraphs."""
    pass


@document_group.command("create")
@click.argument("title")
@click.pass_context
def create_document(ctx, title: str):
    """Create a new document."""
    service = DocumentService(ctx.obj["store"])

    try:
        document_id = service.create_document(title)
        click.echo(f"Created document '{title}' (ID: {document_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@document_group.command("add-section")
@click.argument("document_id", type=int)
@click.argument("title")
@click.pass_context
def add_section(ctx, document_id: int, title: str):
    """Add a section to a document."""
    service = DocumentService(ctx.obj["store"])

    try:
        section_id = service.add_section(document_id, title)
        click.echo(f"Added section '{title}' (ID: {section_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@document_group.command("add-paragraph")
@click.argument("section_id", type=int)
@click.argument("content")
@click.pass_context
def add_paragraph(ctx, section_id: int, content: str):
    """Add a paragraph to a section."""
    service = DocumentService(ctx.obj["store"])

    try:
        paragraph_id = service.add_paragraph(section_id, content)
        click.echo(f"Added paragraph (ID: {paragraph_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@document_group.command("show")
@click.argument("document_id", type=int)
@click.pass_context
def show_document(ctx, document_id: int):
    """Show a document's outline."""
    store = ctx.obj["store"]
    service = DocumentService(store)

    try:
        document = store.get("Document", document_id)
        outline = service.outline(document_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(document.title or f"Document {document_id}")
    for section, paragraphs in outline:
        click.echo(f"  {section.title or ''} ({len(paragraphs)} paragraph(s))")


@document_group.command("delete")
@click.argument("document_id", type=int)
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_document(ctx, document_id: int, force: bool):
    """Delete a document with all of its sections and paragraphs."""
    service = DocumentService(ctx.obj["store"])

    if not force and not click.confirm(f"Delete document {document_id} and everything in it?"):
        click.echo("Deletion cancelled.")
        return

    try:
        removed = service.delete_document(document_id)
        click.echo(f"Deleted document {document_id} ({removed} row(s) removed)")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register document commands with main CLI."""
    cli.add_command(document_group, name="document")
