"""Main CLI entry point."""

import click

from finsight.config import get_settings
from finsight.database.factories import create_sqlite_database
from finsight.logger import setup_logging

# Import and register all commands at module level
from finsight.cli.commands import (
    add,
    category,
    chart,
    chat,
    export,
    holdings,
    insights,
    report,
    summary,
    user,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINSIGHT_DB_PATH environment variable)",
    envvar="FINSIGHT_DB_PATH",
)
@click.option("--log-level", help="Log level (overrides FINSIGHT_LOG_LEVEL)")
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Finsight - personal finance insights.

    Record transactions by hand or in plain language, then get insights,
    dashboard figures, PDF reports and CSV exports.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    setup_logging(level=(log_level or settings.log_level).upper(), log_dir=settings.log_dir)
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_sqlite_database(database_path=db_path or settings.db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
user.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
holdings.register_commands(cli)
chat.register_commands(cli)
insights.register_commands(cli)
summary.register_commands(cli)
chart.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
