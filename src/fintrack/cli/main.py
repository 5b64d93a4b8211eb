"""Main CLI entry point."""

import logging

import click
from fintrack.database.factories import create_sqlite_database

# Import and register all commands at module level
from fintrack.cli.commands import (
    category,
    export_cmd,
    import_cmd,
    init_categories,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Fintrack - Personal finance tracking.

    Record income and expenses, organize them into categories, and move
    transactions in and out through CSV files.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
export_cmd.register_commands(cli)
category.register_commands(cli)
transaction.register_commands(cli)
init_categories.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
