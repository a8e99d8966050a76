"""Init command: create the schema."""

import click


@click.command("init")
@click.pass_context
def init(ctx):
    """Create every table in the configured database."""
    db = ctx.obj["db"]
    db.initialize_schema()
    click.echo(f"Initialized database at {db.database_url}")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init)
