"""Main CLI entry point."""

import logging

import click
from timeblocker.database.factories import create_sqlite_store

# Import and register all commands at module level
from timeblocker.cli.commands import (
    categories,
    day,
    stats,
    sub,
    template,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TIMEBLOCKER_DB_PATH environment variable)",
    envvar="TIMEBLOCKER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Timeblocker - plan and track your day in 5-minute slots.

    Paint a plan and an actual record for each day, export the day as
    Markdown, and review where the time went across several days.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
categories.register_commands(cli)
day.register_commands(cli)
stats.register_commands(cli)
sub.register_commands(cli)
template.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
