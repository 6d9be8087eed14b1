"""Main CLI entry point."""

import click

from bizledger.config import Settings, configure_logging
from bizledger.database.factories import create_database

# Import and register all commands at module level
from bizledger.cli.commands import (
    init_db,
    company,
    user,
    bank,
    transaction,
    project,
    task,
    serve,
)


@click.group()
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides BIZLEDGER_DATABASE_URL environment variable)",
)
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to a SQLite database file (shorthand for a sqlite:/// URL)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides BIZLEDGER_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, database_url: str | None, db_path: str | None, log_level: str | None):
    """Bizledger - company bank accounts and transactions.

    Manage companies, users, bank accounts and the transaction ledger, or
    run the HTTP API.
    """
    ctx.ensure_object(dict)

    if database_url is None and db_path is not None:
        database_url = f"sqlite:///{db_path}"

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = Settings.from_env().with_overrides(
            database_url=database_url,
            log_level=log_level.upper() if log_level else None,
        )
        configure_logging(settings.log_level)

        db = create_database(settings.database_url)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["settings"] = settings
        ctx.obj["db"] = db


# Register all commands
init_db.register_commands(cli)
company.register_commands(cli)
user.register_commands(cli)
bank.register_commands(cli)
transaction.register_commands(cli)
project.register_commands(cli)
task.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
