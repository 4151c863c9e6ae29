"""Main CLI entry point."""

import logging

import click
from dre_engine.database.factories import DB_PATH_ENVVAR, create_sqlite_database

# Import and register all commands at module level
from dre_engine.cli.commands import (
    accounts,
    import_cmd,
    init_chart,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENVVAR} environment variable)",
    envvar=DB_PATH_ENVVAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """DRE - income statement reports for companies.

    Computes the Demonstrativo de Resultado do Exercicio from a configured
    chart of accounts and the ledger entries of each company.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
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
report.register_commands(cli)
accounts.register_commands(cli)
init_chart.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
