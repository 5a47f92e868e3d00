"""Record viewing commands."""

import click
from costtrack.cli.data_context import build_services, load_store_or_exit
from costtrack.cli.filters import filter_options, resolve_filter_state
from costtrack.utils.amount_parser import format_currency
from costtrack.utils.date_parser import format_date


@click.command("view")
@click.option("--limit", type=click.IntRange(min=1), help="Show at most this many records")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields of each record")
@filter_options
@click.pass_context
def view_records(ctx, limit: int | None, verbose: bool, **filter_args):
    """View records with optional filters.

    Use --verbose to show every field including authorizer, clerk and comment.
    """
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    build_services(ctx, store, state)

    records = store.filtered_data
    if not records:
        click.echo("No records found.")
        return

    shown = records[:limit] if limit else records
    click.echo(f"\nFound {len(records)} record(s):")

    if verbose:
        click.echo("=" * 120)
        for record in shown:
            click.echo(f"\nIssue: {record.issue_number} (ID: {record.id})")
            click.echo(f"  Date: {format_date(record.date)} (week {record.week_number})")
            click.echo(f"  Item: {record.item_code} {record.item_description}")
            click.echo(f"  Quantity: {record.quantity:g} x {format_currency(record.unit_cost)}")
            click.echo(f"  Value: {format_currency(record.issued_value)}")
            click.echo(f"  Department: {record.department}")
            click.echo(f"  Section: {record.section}")
            click.echo(f"  Machine: {record.machine}")
            click.echo(f"  Maintenance type: {record.maintenance_type}")
            if record.authorizer:
                click.echo(f"  Authorizer: {record.authorizer}")
            if record.supervisor:
                click.echo(f"  Supervisor: {record.supervisor}")
            if record.warehouse_clerk:
                click.echo(f"  Warehouse clerk: {record.warehouse_clerk}")
            if record.market:
                click.echo(f"  Market: {record.market}")
            if record.comment:
                click.echo(f"  Comment: {record.comment}")
        return

    click.echo("-" * 120)
    click.echo(
        f"{'Date':<14} {'Issue':<10} {'Description':<36} {'Department':<20} {'Machine':<20} {'Value':>16}"
    )
    click.echo("-" * 120)
    for record in shown:
        click.echo(
            f"{format_date(record.date):<14} {record.issue_number[:10]:<10} "
            f"{record.item_description[:36]:<36} {record.department[:20]:<20} "
            f"{record.machine[:20]:<20} {format_currency(record.issued_value):>16}"
        )


@click.command("filters")
@click.pass_context
def list_filter_values(ctx):
    """List the values available for each filter."""
    store = load_store_or_exit(ctx)

    choices = [
        ("Years", [str(year) for year in store.get_unique_years()]),
        ("Departments", store.get_unique_values("department")),
        ("Sections", store.get_unique_values("section")),
        ("Maintenance types", store.get_unique_values("maintenance_type")),
    ]
    for title, values in choices:
        click.echo(f"\n{title}:")
        if not values:
            click.echo("  (none)")
        for value in values:
            click.echo(f"  {value}")


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(view_records)
    cli.add_command(list_filter_values)
