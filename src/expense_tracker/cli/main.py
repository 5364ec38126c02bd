"""Main CLI entry point."""

import click

from expense_tracker.config import get_settings
from expense_tracker.database.factories import create_database, create_sqlite_database
from expense_tracker.domain.category import CategoryService

# Import and register all commands at module level
from expense_tracker.cli.commands import (
    account,
    category,
    expense,
    pattern,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides EXPENSE_TRACKER_DB_PATH environment variable)",
    envvar="EXPENSE_TRACKER_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    help="Acting user ID (overrides EXPENSE_TRACKER_USER_ID environment variable)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: int | None, debug: bool):
    """Expense tracker - accounts, expenses and merchant auto-categorization.

    Balances are kept in step with recorded expenses, and merchant patterns
    suggest a category for new merchant names.
    """
    ctx.ensure_object(dict)

    try:
        settings = get_settings()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    settings.setup_logging(debug=debug)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if db_path is not None:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database(settings.database_url)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        CategoryService(db).ensure_default_categories()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id if user_id is not None else settings.user_id


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
expense.register_commands(cli)
pattern.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
