"""Main CLI entry point."""

import logging

import click
from costtrack.database.factories import create_sqlite_config_store

# Import and register all commands at module level
from costtrack.cli.commands import (
    summary,
    hierarchy,
    view,
    import_cmd,
    export,
    lines,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to configuration database (overrides COSTTRACK_DB_PATH environment variable)",
    envvar="COSTTRACK_DB_PATH",
)
@click.option(
    "--data",
    "data_path",
    type=click.Path(),
    help="Ledger CSV/Excel file to load (overrides COSTTRACK_DATA environment variable)",
    envvar="COSTTRACK_DATA",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, data_path: str | None, verbose: bool):
    """Costtrack - Warehouse maintenance cost dashboard.

    Load a ledger of warehouse issues and summarize spending by period,
    department, section, machine and maintenance type.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_path"] = data_path

    # Open the configuration store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "config_store" not in ctx.obj:
        config_store = create_sqlite_config_store(database_path=db_path)
        config_store.connect()
        ctx.obj["config_store"] = config_store
        ctx.call_on_close(config_store.disconnect)


# Register all commands
summary.register_commands(cli)
hierarchy.register_commands(cli)
view.register_commands(cli)
import_cmd.register_commands(cli)
export.register_commands(cli)
lines.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
