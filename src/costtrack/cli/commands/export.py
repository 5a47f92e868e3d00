"""Ledger export command."""

import click
from costtrack.cli.data_context import build_services, load_store_or_exit
from costtrack.cli.error_handling import handle_domain_error
from costtrack.cli.filters import filter_options, resolve_filter_state
from costtrack.domain.errors import DomainError
from costtrack.domain.export import export_records


@click.command("export")
@click.option(
    "--format",
    "file_format",
    type=click.Choice(["csv", "excel", "xlsx"], case_sensitive=False),
    default="csv",
    show_default=True,
    help="Output file format",
)
@click.option(
    "--scope",
    type=click.Choice(["filtered", "all"], case_sensitive=False),
    default="filtered",
    show_default=True,
    help="Export the filtered records or every record",
)
@click.option(
    "--output-dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Directory to write the export into",
)
@filter_options
@click.pass_context
def export_ledger(ctx, file_format: str, scope: str, output_dir: str, **filter_args):
    """Export records in the ledger's column format."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    build_services(ctx, store, state)

    try:
        path = export_records(store, output_dir, file_format=file_format, scope=scope.lower())
    except DomainError as e:
        handle_domain_error(ctx, e)

    count = len(store.raw_data if scope.lower() == "all" else store.filtered_data)
    click.echo(f"Exported {count} record(s) to {path}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_ledger)
