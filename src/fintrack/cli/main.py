"""Main CLI entry point."""

import click
from fintrack.database.factories import create_database
from fintrack.logging_config import configure_logging

# Import and register all commands at module level
from fintrack.cli.commands import account, expense, income, transfer, summary


@click.group()
@click.option(
    "--database-url",
    help="SQLAlchemy database URL, or memory:// for the in-memory backend",
    envvar="FINTRACK_DATABASE_URL",
)
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    default="default",
    show_default=True,
    help="User whose accounts, expenses and income are managed",
    envvar="FINTRACK_USER",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Minimum level of log events written to stderr",
    envvar="FINTRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, database_url: str | None, db_path: str | None, user_id: str, log_level: str):
    """Fintrack - Personal finance tracking.

    Track expenses against bank, wallet, cash and credit card accounts, keep
    account balances in step with spending, move money between accounts and
    record income.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id


# Register all commands
account.register_commands(cli)
expense.register_commands(cli)
income.register_commands(cli)
transfer.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
