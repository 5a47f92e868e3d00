"""Ledger import command."""

from pathlib import Path

import click
from costtrack.cli.data_context import load_store_or_exit
from costtrack.cli.error_handling import handle_domain_error
from costtrack.domain.dataset import DatasetStore
from costtrack.domain.entities import ImportMode
from costtrack.domain.errors import DomainError
from costtrack.domain.export import write_csv, write_excel


@click.command("import")
@click.argument("import_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--append", is_flag=True, help="Add to the --data ledger instead of replacing it")
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the resulting ledger to this .csv or .xlsx file (otherwise nothing is saved)",
)
@click.pass_context
def import_ledger(ctx, import_file: str, append: bool, output: str | None):
    """Import records from a CSV or Excel file.

    Without --append the --data ledger is not read at all. The result is only
    kept when --output is given; otherwise the command checks the file and
    reports how many records it holds.
    """
    store = load_store_or_exit(ctx) if append else DatasetStore()
    previous_count = len(store.raw_data)
    mode = ImportMode.APPEND if append else ImportMode.REPLACE

    try:
        result = store.import_file(import_file, mode)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nImport complete:")
    click.echo(f"  {result.message}")
    if append:
        click.echo(f"  Previous records: {previous_count}")
    click.echo(f"  Total records: {len(store.raw_data)}")

    if output:
        if Path(output).suffix.lower() == ".xlsx":
            write_excel(store.raw_data, output)
        else:
            write_csv(store.raw_data, output)
        click.echo(f"  Written to: {output}")
    else:
        click.echo("  Not saved; use --output to keep the result.")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_ledger)
