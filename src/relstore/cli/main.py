"""Main CLI entry point."""

import click
from relstore.database.factories import create_sqlite_database
from relstore.domain.store import EntityStore
from relstore.utils.logging import configure_logging

# Import and register all commands at module level
from relstore.cli.commands import author, document, entry, init_cmd, order


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RELSTORE_DB_PATH environment variable)",
    envvar="RELSTORE_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Relstore - relational entity store.

    Create and inspect authors, documents, entries and orders in a SQLite
    database.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    # Open the database only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["store"] = EntityStore(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
init_cmd.register_commands(cli)
author.register_commands(cli)
document.register_commands(cli)
entry.register_commands(cli)
order.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
