"""Main CLI entry point."""

import click
from fintrxn.database.factories import create_sqlite_database
from fintrxn.domain.configuration import Configuration
from fintrxn.domain.errors import ValidationError
from fintrxn.logging_setup import configure_logging

# Import and register all commands at module level
from fintrxn.cli.commands import account, campaign, contribution, posting, batch


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRXN_DB_PATH environment variable)",
    envvar="FINTRXN_DB_PATH",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with the accounting configuration",
    envvar="FINTRXN_CONFIG",
)
@click.option(
    "--log-level",
    help="Log level, e.g. INFO or DEBUG (overrides FINTRXN_LOG_LEVEL)",
    envvar="FINTRXN_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, config_path: str | None, log_level: str | None):
    """Fintrxn - financial transactions for contributions.

    Records contributions and derives the double-entry financial
    transactions their changes imply.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            config = Configuration.from_file(config_path) if config_path else Configuration()
        except ValidationError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["config"] = config


# Register all commands
account.register_commands(cli)
campaign.register_commands(cli)
contribution.register_commands(cli)
posting.register_commands(cli)
batch.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
