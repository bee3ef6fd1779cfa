"""Main CLI entry point."""

import click
from finrecon.database.factories import create_sqlite_database
from finrecon.logging_setup import LOG_LEVEL_ENV, configure_logging

# Import and register all commands at module level
from finrecon.cli.commands import (
    add,
    budget,
    compare,
    import_cmd,
    report,
    transaction,
    trend,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINRECON_DB_PATH environment variable)",
    envvar="FINRECON_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level, e.g. DEBUG or INFO (overrides FINRECON_LOG_LEVEL)",
    envvar=LOG_LEVEL_ENV,
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Finrecon - Budget versus actual reconciliation.

    Record transactions and budgets, then compare what was planned with
    what actually happened over any date range.
    """
    ctx.ensure_object(dict)

    try:
        configure_logging(log_level)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
import_cmd.register_commands(cli)
compare.register_commands(cli)
report.register_commands(cli)
trend.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
