"""Summary commands."""

import click
from costtrack.cli.data_context import build_services, load_store_or_exit
from costtrack.cli.filters import filter_options, resolve_filter_state
from costtrack.utils.amount_parser import format_currency


def _echo_table(title: str, label_header: str, rows: list[tuple[str, float, int]]) -> None:
    """Print label/total/count rows under a heading."""
    click.echo(f"\n{title}:")
    click.echo("-" * 80)
    click.echo(f"{label_header:<50} {'Total':>20} {'Count':>8}")
    click.echo("-" * 80)
    for label, total, count in rows:
        click.echo(f"{label:<50} {format_currency(total):>20} {count:>8}")


@click.command("summary")
@filter_options
@click.pass_context
def summary(ctx, **filter_args):
    """Show KPIs and spending by department and maintenance type."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store, state)

    kpis = service.calculate_kpis()
    if kpis["count"] == 0:
        click.echo("No records found.")
        return

    click.echo("\nKey Figures:")
    click.echo("-" * 80)
    click.echo(f"{'Total spending':<50} {format_currency(kpis['total']):>20}")
    click.echo(f"{'Average per issue':<50} {format_currency(kpis['average']):>20}")
    click.echo(f"{'Issues':<50} {kpis['count']:>20}")
    click.echo(f"{'Top machine':<50} {kpis['top_machine']:>20}")
    click.echo(f"{'Top machine spending':<50} {format_currency(kpis['top_machine_value']):>20}")

    _echo_table(
        "Spending by Department",
        "Department",
        [(d["department"], d["total"], d["count"]) for d in service.get_department_aggregation()],
    )
    _echo_table(
        "Spending by Maintenance Type",
        "Maintenance type",
        [(t["type"], t["total"], t["count"]) for t in service.get_maintenance_type_aggregation()],
    )


@click.command("trend")
@click.option("--weekly", is_flag=True, help="Group by ISO week instead of month")
@filter_options
@click.pass_context
def trend(ctx, weekly: bool, **filter_args):
    """Show spending over time."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store, state)

    series = service.get_weekly_time_series() if weekly else service.get_monthly_time_series()
    if not series:
        click.echo("No records found.")
        return

    _echo_table(
        "Weekly Spending" if weekly else "Monthly Spending",
        "Period",
        [(point["period"], point["total"], point["count"]) for point in series],
    )


@click.command("top-machines")
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True, help="Number of machines to show")
@filter_options
@click.pass_context
def top_machines(ctx, limit: int, **filter_args):
    """Show the machines with the highest spending."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store, state)

    machines = service.get_top_machines(limit)
    if not machines:
        click.echo("No records found.")
        return

    click.echo(f"\nTop {len(machines)} Machines:")
    click.echo("-" * 100)
    click.echo(f"{'Machine':<30} {'Department':<25} {'Section':<20} {'Total':>20}")
    click.echo("-" * 100)
    for m in machines:
        click.echo(
            f"{m['machine']:<30} {m['department']:<25} {m['section']:<20} {format_currency(m['total']):>20}"
        )


@click.command("period")
@click.argument("year", type=int)
@click.argument("month", type=click.IntRange(1, 12))
@click.pass_context
def period(ctx, year: int, month: int):
    """Break down one month of spending (ignores filters)."""
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store)

    breakdown = service.get_period_breakdown(year, month)
    if breakdown["count"] == 0:
        click.echo(f"No records found for {year}-{month:02d}.")
        return

    click.echo(f"\nPeriod {year}-{month:02d}: {breakdown['count']} issues, {format_currency(breakdown['total'])}")
    for title, values in (
        ("By Department", breakdown["by_department"]),
        ("By Maintenance Type", breakdown["by_type"]),
    ):
        click.echo(f"\n{title}:")
        click.echo("-" * 80)
        for label, total in sorted(values.items(), key=lambda item: -item[1]):
            click.echo(f"    {label:<46} {format_currency(total):>20}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(trend)
    cli.add_command(top_machines)
    cli.add_command(period)
